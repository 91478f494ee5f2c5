from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "Blog Accounts API"
    app_version: str = "0.1.0"

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    mongodb_uri: str = "mongodb://localhost:27017/blog_api"
    mongodb_database: str = "blog_api"  # used when the URI carries no database
    mongodb_timeout_ms: int = 5000

    jwt_secret: str = "CHANGE_ME"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60

    bcrypt_rounds: int = 10
    admin_limit: int = 5
    allowed_page_sizes: tuple[int, ...] = (5, 10, 30)

    # Bootstrap performed by GET /install/install
    install_enabled: bool = True
    install_admin_name: str = "usuarioRoot"
    install_admin_email: str = "usuarioRoot@gmail.com"
    install_admin_password: str = "senha123"
    install_sample_posts: int = 5

    cors_allowed_origins: str | list[str] = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def resolved_cors_allowed_origins(self) -> list[str]:
        """Return the configured CORS origins as a normalized list."""

        if isinstance(self.cors_allowed_origins, str):
            return [
                origin.strip()
                for origin in self.cors_allowed_origins.split(",")
                if origin.strip()
            ]

        return list(self.cors_allowed_origins)


@lru_cache
def get_settings() -> Settings:
    """Cache settings to avoid re-parsing environment files."""
    return Settings()
