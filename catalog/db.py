from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from catalog.settings import AppConfig

DATABASE_URL = AppConfig.database_url()

engine = create_async_engine(DATABASE_URL, echo=AppConfig.get_bool("sql_echo"))
SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
Base = declarative_base()


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind, expire_on_commit=False)


async def init_models(bind: AsyncEngine = engine):
    """Create all tables that don't exist yet (local development and tests)."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
