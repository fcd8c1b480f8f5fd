"""Request input types for the book forms and the shared validation rules."""

from typing import List, Mapping, Optional, Tuple

from markupsafe import escape
from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

BOOK_FIELDS = ("title", "author", "summary", "isbn")

EMPTY_FIELD_MESSAGES = {
    "title": "Title must not be empty.",
    "author": "Author must not be empty.",
    "summary": "Summary must not be empty.",
    "isbn": "ISBN must not be empty",
}


def sanitize(value: Optional[str]) -> str:
    """Trim surrounding whitespace and neutralise HTML special characters."""
    return str(escape((value or "").strip()))


class FieldError(BaseModel):
    field: str
    message: str


class BookForm(BaseModel):
    """Fields submitted by the create and update book forms."""

    title: str = Field(default="", validate_default=True)
    author: str = Field(default="", validate_default=True)
    summary: str = Field(default="", validate_default=True)
    isbn: str = Field(default="", validate_default=True)

    @field_validator(*BOOK_FIELDS, mode="before")
    @classmethod
    def _required(cls, value, info: ValidationInfo) -> str:
        value = sanitize(value)
        if not value:
            raise PydanticCustomError("empty", EMPTY_FIELD_MESSAGES[info.field_name])
        return value


def validate_book_form(data: Mapping[str, Optional[str]]) -> Tuple[BookForm, List[FieldError]]:
    """
    Run the book field rules over submitted form data.

    Always returns a form carrying the sanitised values, so a failed
    submission can be shown back to the user, plus the list of field errors
    (empty when the submission is valid).
    """
    try:
        return BookForm.model_validate(dict(data)), []
    except ValidationError as exc:
        candidate = BookForm.model_construct(
            **{name: sanitize(data.get(name)) for name in BOOK_FIELDS}
        )
        errors = [
            FieldError(field=str(err["loc"][0]), message=err["msg"])
            for err in exc.errors()
        ]
        return candidate, errors
