import logging
import sys
from json import JSONDecodeError
from typing import List, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings.sources import (
    EnvSettingsSource,
    PydanticBaseSettingsSource,
)


class Settings(BaseSettings):
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        class LenientEnvSource(EnvSettingsSource):
            def decode_complex_value(self, field_name, field, value):  # type: ignore[override]
                try:
                    return super().decode_complex_value(field_name, field, value)
                except JSONDecodeError:
                    return value

        return (
            init_settings,
            LenientEnvSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )

    @field_validator("USERS_API_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, value: str | List[str] | Tuple[str, ...]) -> Tuple[str, ...]:
        if isinstance(value, str):
            origins = [item.strip() for item in value.split(",") if item.strip()]
        else:
            origins = [str(item).strip() for item in value if str(item).strip()]
        return tuple(sorted(set(origins), key=origins.index))

    USERS_API_URL_PREFIX: str = Field(default="/api", description="API URL prefix")
    USERS_API_HOST: str = Field(default="localhost", description="Bind address")
    USERS_API_PORT: int = Field(default=5000, description="Bind port")
    USERS_API_DEFAULT_PAGE_SIZE: int = Field(default=10, ge=1, description="Page size when none is requested")
    USERS_API_MAX_PAGE_SIZE: int = Field(default=20, ge=1, description="Upper bound for requested page size")
    USERS_API_CORS_ORIGINS: Tuple[str, ...] = Field(default=("*",), description="Allowed CORS origins")
    DEBUG: int = Field(default=0, description="Debug mode flag")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()

logging.basicConfig(stream=sys.stdout, level=logging.DEBUG if settings.DEBUG else logging.INFO)
