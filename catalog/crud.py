import logging
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, load_only

from catalog.models import Author, Book

logger = logging.getLogger("local-library")


async def count_books(session: AsyncSession) -> int:
    q = await session.execute(select(func.count()).select_from(Book))
    return q.scalar_one()


async def count_authors(session: AsyncSession) -> int:
    q = await session.execute(select(func.count()).select_from(Author))
    return q.scalar_one()


async def fetch_authors_sorted(session: AsyncSession) -> List[Author]:
    """Fetch all authors ordered by family name, for selection lists."""
    q = await session.execute(select(Author).order_by(Author.family_name))
    return q.scalars().all()


async def fetch_book_list(session: AsyncSession) -> List[Book]:
    """Fetch every book with only title and author loaded, ordered by title."""
    q = await session.execute(
        select(Book)
        .options(load_only(Book.title, Book.author_id), joinedload(Book.author))
        .order_by(Book.title)
    )
    return q.scalars().all()


async def fetch_book_by_id(session: AsyncSession, book_id: str) -> Optional[Book]:
    q = await session.execute(
        select(Book).options(joinedload(Book.author)).where(Book.id == book_id)
    )
    return q.scalar_one_or_none()


async def create_book(session: AsyncSession, book: Book) -> Book:
    session.add(book)
    await session.commit()
    logger.info(f"Created book {book.id}")
    return book


async def update_book(
    session: AsyncSession, book_id: str, title: str, author_id: str, summary: str, isbn: str
) -> Optional[Book]:
    """Update a book in a single statement and return the stored row, or None."""
    q = await session.execute(
        update(Book)
        .where(Book.id == book_id)
        .values(title=title, author_id=author_id, summary=summary, isbn=isbn)
        .returning(Book)
    )
    book = q.scalar_one_or_none()
    await session.commit()
    if book is not None:
        logger.info(f"Updated book {book_id}")
    return book


async def delete_book(session: AsyncSession, book_id: str) -> bool:
    q = await session.execute(delete(Book).where(Book.id == book_id))
    await session.commit()
    logger.info(f"Deleted book {book_id}")
    return q.rowcount > 0

