import logging
import os

import pytest_asyncio
from faker import Faker
from httpx import ASGITransport, AsyncClient

from app.core.config import settings
from app.core.db import Database
from app.db.repositories.post_repository import PostRepository
from app.domains.posts.services import PostService
from app.main import create_app

logger = logging.getLogger(__name__)

fake = Faker()


def generate_post_data():
    """Generate a blog post payload usable as seed data or request body"""
    return {
        "title": fake.sentence(nb_words=4),
        "content": fake.paragraph(),
        "author": {
            "firstName": fake.first_name(),
            "lastName": fake.last_name(),
        },
    }


@pytest_asyncio.fixture
async def database_url(tmp_path):
    """TEST_DATABASE_URL when set explicitly, otherwise a throwaway sqlite file"""
    if "TEST_DATABASE_URL" in os.environ:
        return settings.test_database_url
    return f"sqlite+aiosqlite:///{tmp_path / 'test-blog-app.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    """Connected database, emptied after each test"""
    database = Database()
    await database.connect(database_url)

    yield database

    if database.is_connected:
        logger.warning("Deleting blog posts")
        async with database.session() as session:
            await PostRepository(session).delete_all()
        await database.disconnect()


@pytest_asyncio.fixture
async def app(database):
    return create_app(database)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def seeded_posts(database):
    """Insert 10 generated blog posts"""
    logger.info("Seeding blog post data")
    async with database.session() as session:
        return await PostService(session).insert_many(
            [generate_post_data() for _ in range(10)]
        )
