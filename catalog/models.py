import datetime
import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.db import Base


def new_id() -> str:
    return str(uuid.uuid4())


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    first_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    family_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    date_of_birth: Mapped[datetime.date] = mapped_column(sa.Date, nullable=True)
    date_of_death: Mapped[datetime.date] = mapped_column(sa.Date, nullable=True)

    books = relationship("Book", back_populates="author", lazy="raise")

    @property
    def name(self) -> str:
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return self.family_name or self.first_name or ""

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"


class Book(Base):
    __tablename__ = "books"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(sa.String, nullable=False, index=True)
    author_id: Mapped[str] = mapped_column(
        sa.String(36), sa.ForeignKey("authors.id"), nullable=False
    )
    summary: Mapped[str] = mapped_column(sa.Text, nullable=False)
    isbn: Mapped[str] = mapped_column(sa.String, nullable=False)

    # Never lazy loaded: queries must ask for the author explicitly
    author = relationship("Author", back_populates="books", lazy="raise")

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"
