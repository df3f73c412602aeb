from sqlalchemy import (
    Column,
    String,
    Integer,
    ForeignKey,
    Date,
    Index,
)
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Authorship(BaseModel, Base):
    """Join row linking one book to one of its authors."""
    __tablename__ = "authorships"

    # Book deletion removes its authorships; an author with books cannot be deleted
    isbn = Column(String(20), ForeignKey("books.isbn", ondelete="CASCADE"), primary_key=True)
    rg = Column(String(20), ForeignKey("authors.rg", ondelete="RESTRICT"), primary_key=True)

    __table_args__ = (
        Index("ix_authorships_rg", "rg"),
    )


class Book(BaseModel, Base):
    __tablename__ = "books"

    # Stored stripped; uniqueness enforced by the primary key
    isbn = Column(String(20), primary_key=True)
    title = Column(String(255), nullable=False)
    published_date = Column(Date, nullable=False)  # validated not in future (in schema)

    # Publisher: RESTRICT deletion if books reference it
    publisher_id = Column(Integer, ForeignKey("publishers.id", ondelete="RESTRICT"), nullable=False)

    # Relationships
    publisher = relationship("Publisher")

    __table_args__ = (
        Index("ix_books_title", "title"),
        Index("ix_books_publisher_id", "publisher_id"),
    )
