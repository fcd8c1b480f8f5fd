import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.ext.asyncio import async_sessionmaker

from catalog.controllers import Failure, Outcome, Redirect
from catalog.controllers import book as book_controller
from catalog.templating import templates

logger = logging.getLogger("local-library")

router = APIRouter(prefix="/catalog")


def get_sessions(request: Request) -> async_sessionmaker:
    return request.app.state.sessions


def to_response(request: Request, outcome: Outcome) -> Response:
    """Turn a controller outcome into an HTTP response."""
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.url, status_code=outcome.status_code)
    if isinstance(outcome, Failure):
        return templates.TemplateResponse(
            request,
            "error.html",
            {"title": outcome.message, "message": outcome.message, "status": outcome.status_code},
            status_code=outcome.status_code,
        )
    return templates.TemplateResponse(
        request, outcome.template, outcome.context, status_code=outcome.status_code
    )


def book_form_data(
    title: str = Form(""),
    author: str = Form(""),
    summary: str = Form(""),
    isbn: str = Form(""),
) -> dict:
    return {"title": title, "author": author, "summary": summary, "isbn": isbn}


@router.get("/")
async def index(request: Request, sessions: async_sessionmaker = Depends(get_sessions)):
    return to_response(request, await book_controller.index(sessions))


@router.get("/books")
async def book_list(request: Request, sessions: async_sessionmaker = Depends(get_sessions)):
    return to_response(request, await book_controller.book_list(sessions))


# Registered before /book/{book_id} so "create" is never taken for an id
@router.get("/book/create")
async def book_create_get(request: Request, sessions: async_sessionmaker = Depends(get_sessions)):
    return to_response(request, await book_controller.book_create_get(sessions))


@router.post("/book/create")
async def book_create_post(
    request: Request,
    data: dict = Depends(book_form_data),
    sessions: async_sessionmaker = Depends(get_sessions),
):
    return to_response(request, await book_controller.book_create_post(sessions, data))


@router.get("/book/{book_id}")
async def book_detail(
    book_id: str, request: Request, sessions: async_sessionmaker = Depends(get_sessions)
):
    return to_response(request, await book_controller.book_detail(sessions, book_id))


@router.get("/book/{book_id}/delete")
async def book_delete_get(
    book_id: str, request: Request, sessions: async_sessionmaker = Depends(get_sessions)
):
    return to_response(request, await book_controller.book_delete_get(sessions, book_id))


@router.post("/book/{book_id}/delete")
async def book_delete_post(
    book_id: str, request: Request, sessions: async_sessionmaker = Depends(get_sessions)
):
    return to_response(request, await book_controller.book_delete_post(sessions, book_id))


@router.get("/book/{book_id}/update")
async def book_update_get(
    book_id: str, request: Request, sessions: async_sessionmaker = Depends(get_sessions)
):
    return to_response(request, await book_controller.book_update_get(sessions, book_id))


@router.post("/book/{book_id}/update")
async def book_update_post(
    book_id: str,
    request: Request,
    data: dict = Depends(book_form_data),
    sessions: async_sessionmaker = Depends(get_sessions),
):
    return to_response(request, await book_controller.book_update_post(sessions, book_id, data))
