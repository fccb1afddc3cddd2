# settings.py
import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from cloudsentiment.exceptions import ConfigurationError


class Settings(BaseSettings):
    # Amazon Comprehend
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: str = Field(
        default="us-east-1",
        description="Region of the Comprehend endpoint"
    )

    # Azure Text Analytics
    AZURE_ENDPOINT: Optional[str] = None
    AZURE_KEY: Optional[str] = None

    # Google Cloud Natural Language (service account file)
    GOOGLE_APPLICATION_CREDENTIALS: Path = Field(
        default=Path("gcloud-credentials.json"),
        description="Path to the service account JSON file"
    )

    # IBM Watson NLU
    IBM_WATSON_API_KEY: Optional[str] = None
    IBM_WATSON_URL: Optional[str] = None
    IBM_WATSON_VERSION: str = "2020-08-01"

    # None = ждём ответа без ограничения по времени
    REQUEST_TIMEOUT: Optional[float] = None

    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Optional[Path] = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, level):
        level = str(level).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {level}")
        return level

    @property
    def aws_configured(self) -> bool:
        return bool(self.AWS_ACCESS_KEY_ID and self.AWS_SECRET_ACCESS_KEY)

    @property
    def azure_configured(self) -> bool:
        return bool(self.AZURE_ENDPOINT and self.AZURE_KEY)

    @property
    def gcp_configured(self) -> bool:
        return self.GOOGLE_APPLICATION_CREDENTIALS.is_file()

    @property
    def ibm_configured(self) -> bool:
        return bool(self.IBM_WATSON_API_KEY and self.IBM_WATSON_URL)


def get_settings(env_file: Optional[Path] = Path(".env")) -> Settings:
    """Build settings from the environment and the given .env file (if any)."""
    if env_file is not None and not Path(env_file).is_file():
        env_file = None
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}")
