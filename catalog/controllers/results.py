"""Outcomes returned by controllers for the router to turn into responses."""

import enum
from typing import Any, Dict, Union

from pydantic import BaseModel


class ErrorKind(enum.Enum):
    NOT_FOUND = 404


class Render(BaseModel):
    template: str
    context: Dict[str, Any] = {}
    status_code: int = 200


class Redirect(BaseModel):
    url: str
    status_code: int = 302


class Failure(BaseModel):
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return self.kind.value


Outcome = Union[Render, Redirect, Failure]
