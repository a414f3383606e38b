from typing import Any

from pydantic import PostgresDsn, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Linkboard"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False

    SECRET_KEY: str = "changethis"
    # 60 minutes * 24 hours * 8 days = 8 days
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8

    DATABASE_URL: str | None = None
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "linkboard"
    DB_STATEMENT_TIMEOUT_MS: int = 5000

    LOG_DIR: str | None = None

    SUGGESTIONS_DEFAULT_LIMIT: int = 10
    SUGGESTIONS_MAX_LIMIT: int = 50

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            PostgresDsn.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    @model_validator(mode="after")
    def _check_limits(self) -> Any:
        if self.SUGGESTIONS_DEFAULT_LIMIT > self.SUGGESTIONS_MAX_LIMIT:
            raise ValueError(
                "SUGGESTIONS_DEFAULT_LIMIT must not exceed SUGGESTIONS_MAX_LIMIT"
            )
        return self


settings = Settings()  # type: ignore
