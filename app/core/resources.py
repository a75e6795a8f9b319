"""
Process-wide client handles, built once at startup and closed at shutdown.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.cache.redis import Client
from app.core.config import Settings
from app.db.session import create_db_engine, create_session_factory
from app.services.ai import SocialSummaryGenerator
from app.services.auth import FirebaseTokenVerifier
from app.services.storage import UploadStorageClient

logger = logging.getLogger(__name__)


@dataclass
class Resources:
    engine: Engine
    session_factory: sessionmaker
    cache: Client
    verifier: FirebaseTokenVerifier
    summaries: SocialSummaryGenerator
    storage: UploadStorageClient
    settings: Settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "Resources":
        engine = create_db_engine(settings.DATABASE_URL, pool_pre_ping=True)
        return cls(
            engine=engine,
            session_factory=create_session_factory(engine),
            cache=Client(redis_url=settings.REDIS_URL),
            verifier=FirebaseTokenVerifier(settings.FIREBASE_PROJECT_ID, settings.FIREBASE_CERTS_URL),
            summaries=SocialSummaryGenerator(
                api_key=settings.OPENAI_API_KEY.get_secret_value(),
                model=settings.OPENAI_MODEL,
                thread_model=settings.OPENAI_THREAD_MODEL,
            ),
            storage=UploadStorageClient(settings.UPLOAD_SERVICE_URL),
            settings=settings,
        )

    def close(self) -> None:
        self.cache.close()
        self.engine.dispose()
        logger.info("Resources closed")
