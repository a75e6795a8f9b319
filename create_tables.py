import logging

from sqlalchemy import inspect

from app.core.config import settings
from app.db.base import Base
from app.db.session import create_db_engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_tables():
    engine = create_db_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)

    tables = inspect(engine).get_table_names()
    logger.info(f"Tables present: {', '.join(sorted(tables))}")
    engine.dispose()


if __name__ == "__main__":
    create_tables()
