import uuid

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import InvalidIdentifier, NotFound, ValidationError
from app.db.repositories.post_repository import PostRepository
from app.domains.posts.entities import Author, BlogPost
from app.domains.posts.schemas import AuthorSchema, PostCreate, PostUpdate
from app.domains.posts.services import PostService
from tests.conftest import generate_post_data


class TestCreateAndFind:
    """Test creating and fetching posts through the service"""

    @pytest.mark.asyncio
    async def test_create_then_find_round_trip(self, database):
        """Test that a created post is fetched back with the same fields"""
        data = generate_post_data()

        async with database.session() as session:
            created = await PostService(session).create_post(data)

        assert created.id is not None

        async with database.session() as session:
            found = await PostService(session).find_by_id(str(created.id))

        assert found.title == data["title"]
        assert found.content == data["content"]
        assert found.author == Author(data["author"]["firstName"], data["author"]["lastName"])

    @pytest.mark.asyncio
    async def test_create_from_schema(self, database):
        post_data = PostCreate(
            title="A", content="B", author=AuthorSchema(firstName="X", lastName="Y")
        )

        async with database.session() as session:
            created = await PostService(session).create_post(post_data)

        assert created.author == Author("X", "Y")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["title", "content"])
    async def test_missing_field_persists_nothing(self, database, missing):
        """Test that a post without title or content is rejected and not stored"""
        data = generate_post_data()
        del data[missing]

        async with database.session() as session:
            service = PostService(session)
            with pytest.raises(ValidationError):
                await service.create_post(data)
            assert await service.count_posts() == 0

    @pytest.mark.asyncio
    async def test_find_absent_id_returns_none(self, database):
        async with database.session() as session:
            assert await PostService(session).find_by_id(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_absent_id_raises_not_found(self, database):
        async with database.session() as session:
            with pytest.raises(NotFound):
                await PostService(session).get_post(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_malformed_id_raises_invalid_identifier(self, database):
        async with database.session() as session:
            with pytest.raises(InvalidIdentifier):
                await PostService(session).find_by_id("not-an-id")


class TestInsertMany:
    """Test bulk insertion"""

    @pytest.mark.asyncio
    async def test_inserts_all(self, database):
        async with database.session() as session:
            service = PostService(session)
            created = await service.insert_many([generate_post_data() for _ in range(5)])

            assert len(created) == 5
            assert len({post.id for post in created}) == 5
            assert await service.count_posts() == 5

    @pytest.mark.asyncio
    async def test_one_invalid_item_inserts_nothing(self, database):
        """Test that bulk insert is all-or-nothing"""
        items = [generate_post_data() for _ in range(3)]
        items[2]["title"] = ""

        async with database.session() as session:
            service = PostService(session)
            with pytest.raises(ValidationError, match="Item 2"):
                await service.insert_many(items)
            assert await service.count_posts() == 0

    @pytest.mark.asyncio
    async def test_database_error_rolls_back_batch(self, database):
        """Test that a failing commit stores none of the batch and keeps the session usable"""
        duplicate_id = uuid.uuid4()
        posts = [
            BlogPost(id=duplicate_id, title="First", content="One", author=Author("A", "B")),
            BlogPost(id=duplicate_id, title="Second", content="Two", author=Author("C", "D")),
        ]

        async with database.session() as session:
            repository = PostRepository(session)
            with pytest.raises(SQLAlchemyError):
                await repository.create_many(posts)

            assert await repository.count() == 0

            created = await repository.create(
                BlogPost.create_post(title="Third", content="Three")
            )
            assert created.id is not None
            assert await repository.count() == 1

    @pytest.mark.asyncio
    async def test_empty_batch(self, database):
        async with database.session() as session:
            assert await PostService(session).insert_many([]) == []


class TestUpdateAndDelete:
    """Test partial update and hard delete"""

    @pytest.mark.asyncio
    async def test_partial_update(self, database, seeded_posts):
        post = seeded_posts[0]

        async with database.session() as session:
            updated = await PostService(session).update_post(
                str(post.id),
                PostUpdate(title="Updated", author=AuthorSchema(lastName="Smith"))
            )

        assert updated.id == post.id
        assert updated.title == "Updated"
        assert updated.content == post.content
        assert updated.author == Author(post.author.first_name, "Smith")

    @pytest.mark.asyncio
    async def test_update_with_mismatched_body_id(self, database, seeded_posts):
        async with database.session() as session:
            with pytest.raises(ValidationError):
                await PostService(session).update_post(
                    seeded_posts[0].id, PostUpdate(id=str(uuid.uuid4()), title="X")
                )

    @pytest.mark.asyncio
    async def test_update_absent_post(self, database):
        async with database.session() as session:
            with pytest.raises(NotFound):
                await PostService(session).update_post(uuid.uuid4(), PostUpdate(title="X"))

    @pytest.mark.asyncio
    async def test_delete(self, database, seeded_posts):
        post = seeded_posts[0]

        async with database.session() as session:
            service = PostService(session)
            await service.delete_post(str(post.id))

            assert await service.find_by_id(post.id) is None
            assert await service.count_posts() == len(seeded_posts) - 1

    @pytest.mark.asyncio
    async def test_delete_absent_post(self, database):
        async with database.session() as session:
            with pytest.raises(NotFound):
                await PostService(session).delete_post(uuid.uuid4())


class TestPublicViewSeparator:

    @pytest.mark.asyncio
    async def test_service_uses_configured_separator(self, database, seeded_posts):
        post = seeded_posts[0]

        async with database.session() as session:
            view = PostService(session, author_separator=" ").public_view(post)

        assert view["author"] == f"{post.author.first_name} {post.author.last_name}"
