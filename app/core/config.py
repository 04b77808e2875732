from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost/blog-app"
    test_database_url: str = "sqlite+aiosqlite:///./test-blog-app.db"

    host: str = "0.0.0.0"
    port: int = 8080

    log_level: str = "INFO"
    sql_echo: bool = False

    # Разделитель между именем и фамилией автора в публичном представлении
    author_separator: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
