import secrets
import warnings
from typing import Literal

from pydantic import EmailStr, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


class Settings(BaseSettings):
    """Application settings, read from the environment and a top level `.env` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Fakebooks"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    SECRET_KEY: str = secrets.token_urlsafe(32)
    # 60 minutes * 24 hours * 8 days = 8 days
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8
    SESSION_COOKIE_NAME: str = "__session"

    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./fakebooks.db"

    FIRST_WORKER_EMAIL: EmailStr | None = None
    FIRST_WORKER_PASSWORD: str | None = None
    FIRST_WORKER_NAME: str = "Admin"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SESSION_COOKIE_SECURE(self) -> bool:
        return self.ENVIRONMENT != "local"

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", '
                "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        self._check_default_secret("SECRET_KEY", self.SECRET_KEY)
        self._check_default_secret("FIRST_WORKER_PASSWORD", self.FIRST_WORKER_PASSWORD)
        return self


settings = Settings()  # type: ignore
