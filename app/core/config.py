import logging
from typing import List, Union, Any, Optional
from pydantic import AnyHttpUrl, PostgresDsn, Field, field_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from google.cloud import secretmanager
from google.api_core.exceptions import NotFound
import os

logger = logging.getLogger(__name__)


def get_secrets() -> Optional[dict[str, str]]:
    if os.getenv('GOOGLE_CLOUD_PROJECT'):
        client = secretmanager.SecretManagerServiceClient()
        project_id = os.getenv('GOOGLE_CLOUD_PROJECT')

        secrets = {}
        secret_ids = ['DATABASE_URL', 'REDIS_URL', 'OPENAI_API_KEY', 'FIREBASE_PROJECT_ID',
                      'POSTGRES_SERVER', 'POSTGRES_USER', 'POSTGRES_PASSWORD', 'POSTGRES_DB',
                      'UPLOAD_SERVICE_URL']

        for secret_id in secret_ids:
            try:
                name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
                response = client.access_secret_version(request={"name": name})
                secrets[secret_id] = response.payload.data.decode("UTF-8")
            except NotFound:
                logger.warning(f"Secret {secret_id} not found in GCP Secret Manager.")
            except Exception as e:
                logger.error(f"Error retrieving secret {secret_id}: {e}")

        return secrets
    else:
        return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="allow")

    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Pixie"

    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = [
        "http://localhost:3000",
        "http://localhost:8080",
    ]

    GOOGLE_CLOUD_PROJECT: Optional[str] = None
    ENVIRONMENT: str = Field(default="development")

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "pixie"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "pixie"
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    REDIS_URL: str = Field(default="redis://localhost:6379/0")

    FIREBASE_PROJECT_ID: str = Field(default="")
    FIREBASE_CERTS_URL: str = Field(
        default="https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com"
    )

    OPENAI_API_KEY: SecretStr = Field(default=SecretStr(""))
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    OPENAI_THREAD_MODEL: str = Field(default="gpt-4o")

    UPLOAD_SERVICE_URL: str = Field(default="http://localhost:3000/api/uploadthing")

    # Cache lifetimes in seconds; blog and comment keys never expire and
    # rely on invalidation alone.
    SEARCH_CACHE_TTL: int = 3600
    TRENDING_TAGS_CACHE_TTL: int = 600
    STATS_CACHE_TTL: int = 1800

    DEFAULT_FEED_LIMIT: int = 5

    @field_validator("DATABASE_URL", mode='before')
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: Any) -> Any:
        if isinstance(v, str) and v:
            return v
        return str(PostgresDsn.build(
            scheme="postgresql",
            username=info.data.get("POSTGRES_USER"),
            password=info.data.get("POSTGRES_PASSWORD") or None,
            host=info.data.get("POSTGRES_SERVER"),
            port=int(info.data.get("POSTGRES_PORT", 5432)),
            path=info.data.get('POSTGRES_DB') or '',
        ))

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str):
            try:
                import json
                return json.loads(v)
            except json.JSONDecodeError:
                return [i.strip() for i in v.split(",") if i.strip()]
        return v

    @classmethod
    def from_gcp_secrets(cls) -> 'Settings':
        secrets = get_secrets()
        if secrets:
            return cls(**secrets)
        return cls()


def get_settings() -> Settings:
    env = os.getenv("ENVIRONMENT", "development")
    if env == "production":
        return Settings.from_gcp_secrets()
    return Settings()


settings = get_settings()

logger.info("Settings loaded:")
for field, value in settings.model_dump().items():
    if isinstance(value, SecretStr) or field in ("DATABASE_URL", "POSTGRES_PASSWORD", "REDIS_URL"):
        logger.info(f"{field}: [REDACTED]")
    else:
        logger.info(f"{field}: {value}")
