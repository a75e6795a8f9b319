import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api import deps
from app.api.api import api_router
from app.api.endpoints import pages
from app.core.config import settings
from app.core.exceptions import PixieError
from app.core.resources import Resources

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(resources: Optional[Resources] = None) -> FastAPI:
    """
    Build the application. Client handles are created from settings at
    startup unless prebuilt ones are passed in.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application is starting up")
        app.state.resources = resources or Resources.from_settings(settings)
        yield
        logger.info("Application is shutting down")
        app.state.resources.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )

    @app.exception_handler(PixieError)
    async def pixie_error_handler(request: Request, exc: PixieError):
        # Internal cause stays in the log; callers get a generic message
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc!r}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.public_message})

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(pages.router)
    logger.info("API router included")

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["GET", "POST", "DELETE"],
            allow_headers=["*"],
        )
        logger.info(f"CORS middleware added with origins: {settings.BACKEND_CORS_ORIGINS}")

    @app.get("/health")
    def health_check(db: Session = Depends(deps.get_db)):
        try:
            db.execute(text("SELECT 1"))
            return {"status": "healthy", "database": "connected"}
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {str(e)}")
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "database": "disconnected"}
            )

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8080, reload=settings.ENVIRONMENT == "development")
