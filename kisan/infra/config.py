from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    fastapi_port: int = Field(default=5000, validation_alias="FASTAPI_PORT")
    crop_dataset_path: Optional[str] = Field(
        default=None, validation_alias="CROP_DATASET_PATH"
    )
    risk_random_seed: Optional[int] = Field(
        default=None, validation_alias="RISK_RANDOM_SEED"
    )
    log_path: Optional[str] = Field(default=None, validation_alias="LOG_PATH")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_allow_origins: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGINS")

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() if value else "INFO"

    @field_validator("crop_dataset_path", "log_path", "risk_random_seed", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def cors_origins(self) -> List[str]:
        origins = [item.strip() for item in self.cors_allow_origins.split(",")]
        return [item for item in origins if item] or ["*"]


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig()
