import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from catalog import crud
from catalog.db import init_models, make_session_factory
from catalog.main import create_app
from catalog.models import Author, Book


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", poolclass=NullPool
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessions(engine):
    return make_session_factory(engine)


@pytest.fixture
async def authors(sessions):
    # Authors are only read by the catalog, so tests insert them directly
    austen = Author(first_name="Jane", family_name="Austen")
    bronte = Author(first_name="Charlotte", family_name="Bronte")
    async with sessions() as session:
        session.add_all([austen, bronte])
        await session.commit()
    return {"austen": austen, "bronte": bronte}


@pytest.fixture
async def client(sessions):
    app = create_app(sessions)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def make_book(sessions):
    async def _make_book(author, title="Emma", summary="A matchmaker", isbn="9780141439587"):
        async with sessions() as session:
            return await crud.create_book(
                session, Book(title=title, author_id=author.id, summary=summary, isbn=isbn)
            )

    return _make_book
