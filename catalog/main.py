import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from catalog.settings import AppConfig

logging.basicConfig(
    level=AppConfig.get_value("log_level", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.db import SessionLocal
from catalog.routes import router
from catalog.templating import templates

logger = logging.getLogger("local-library")


def _error_page(request: Request, status_code: int, message: str):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": message, "message": message, "status": status_code},
        status_code=status_code,
    )


def create_app(sessions: Optional[async_sessionmaker] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Local library catalog starting")
        yield
        logger.info("Local library catalog stopped")

    app = FastAPI(title="Local Library", lifespan=lifespan)
    app.state.sessions = sessions or SessionLocal
    app.include_router(router)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return _error_page(request, 500, "Internal Server Error")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_page(request, exc.status_code, str(exc.detail))

    @app.get("/")
    def read_root():
        return RedirectResponse("/catalog/", status_code=302)

    return app


app = create_app()
