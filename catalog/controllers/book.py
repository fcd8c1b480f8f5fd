"""
Book request handlers.

Each handler takes an async session factory and typed request input and
returns an Outcome (Render, Redirect or Failure). Independent reads are
issued together, each on its own session.
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from catalog import crud
from catalog.controllers.results import ErrorKind, Failure, Outcome, Redirect, Render
from catalog.forms import BookForm, validate_book_form
from catalog.models import Book

logger = logging.getLogger("local-library")

BOOK_LIST_URL = "/catalog/books"
BOOK_NOT_FOUND = "Book not found"


async def _read(sessions: async_sessionmaker, query, *args):
    async with sessions() as session:
        return await query(session, *args)


async def _read_all(sessions: async_sessionmaker, *reads):
    """
    Run independent reads concurrently, one session each.

    If any read fails the others are cancelled and collected before the
    first error is raised.
    """
    tasks = [asyncio.ensure_future(_read(sessions, query, *args)) for query, *args in reads]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def _candidate_book(form: BookForm, book_id: str = None) -> Book:
    book = Book(
        title=form.title,
        author_id=form.author,
        summary=form.summary,
        isbn=form.isbn,
    )
    if book_id is not None:
        book.id = book_id
    return book


async def index(sessions: async_sessionmaker) -> Outcome:
    num_books, num_authors = await _read_all(
        sessions,
        (crud.count_books,),
        (crud.count_authors,),
    )
    return Render(
        template="index.html",
        context={
            "title": "Local Library Home",
            "book_count": num_books,
            "author_count": num_authors,
        },
    )


async def book_list(sessions: async_sessionmaker) -> Outcome:
    all_books = await _read(sessions, crud.fetch_book_list)
    return Render(
        template="book_list.html",
        context={"title": "Book List", "book_list": all_books},
    )


async def book_detail(sessions: async_sessionmaker, book_id: str) -> Outcome:
    book = await _read(sessions, crud.fetch_book_by_id, book_id)
    if book is None:
        logger.info(f"Book {book_id} not found")
        return Failure(kind=ErrorKind.NOT_FOUND, message=BOOK_NOT_FOUND)

    return Render(template="book_detail.html", context={"title": book.title, "book": book})


async def book_create_get(sessions: async_sessionmaker) -> Outcome:
    all_authors = await _read(sessions, crud.fetch_authors_sorted)
    return Render(
        template="book_form.html",
        context={"title": "Create Book", "authors": all_authors},
    )


async def book_create_post(sessions: async_sessionmaker, data: dict) -> Outcome:
    form, errors = validate_book_form(data)
    book = _candidate_book(form)

    if errors:
        logger.info(f"Rejected book submission: {[e.field for e in errors]}")
        all_authors = await _read(sessions, crud.fetch_authors_sorted)
        return Render(
            template="book_form.html",
            context={
                "title": "Create Book",
                "authors": all_authors,
                "book": book,
                "errors": errors,
            },
        )

    async with sessions() as session:
        await crud.create_book(session, book)
    return Redirect(url=book.url)


async def book_delete_get(sessions: async_sessionmaker, book_id: str) -> Outcome:
    book = await _read(sessions, crud.fetch_book_by_id, book_id)
    if book is None:
        return Redirect(url=BOOK_LIST_URL)

    return Render(template="book_delete.html", context={"title": "Delete Book", "book": book})


async def book_delete_post(sessions: async_sessionmaker, book_id: str) -> Outcome:
    async with sessions() as session:
        book = await crud.fetch_book_by_id(session, book_id)
        if book is None:
            return Redirect(url=BOOK_LIST_URL)
        await crud.delete_book(session, book_id)
    return Redirect(url=BOOK_LIST_URL)


async def book_update_get(sessions: async_sessionmaker, book_id: str) -> Outcome:
    book, all_authors = await _read_all(
        sessions,
        (crud.fetch_book_by_id, book_id),
        (crud.fetch_authors_sorted,),
    )
    if book is None:
        logger.info(f"Book {book_id} not found")
        return Failure(kind=ErrorKind.NOT_FOUND, message=BOOK_NOT_FOUND)

    return Render(
        template="book_form.html",
        context={"title": "Update Book", "authors": all_authors, "book": book},
    )


async def book_update_post(sessions: async_sessionmaker, book_id: str, data: dict) -> Outcome:
    form, errors = validate_book_form(data)
    # Carries the existing id; an update never assigns a new one
    book = _candidate_book(form, book_id)

    if errors:
        logger.info(f"Rejected update for book {book_id}: {[e.field for e in errors]}")
        all_authors = await _read(sessions, crud.fetch_authors_sorted)
        return Render(
            template="book_form.html",
            context={
                "title": "Update Book",
                "authors": all_authors,
                "book": book,
                "errors": errors,
            },
        )

    async with sessions() as session:
        the_book = await crud.update_book(
            session,
            book_id,
            title=book.title,
            author_id=book.author_id,
            summary=book.summary,
            isbn=book.isbn,
        )
    if the_book is None:
        logger.info(f"Book {book_id} vanished before update")
        return Failure(kind=ErrorKind.NOT_FOUND, message=BOOK_NOT_FOUND)
    return Redirect(url=the_book.url)
