from sqlalchemy import Column, String, Index

from models.base_model import BaseModel, Base


class Author(BaseModel, Base):
    __tablename__ = "authors"

    # National id (RG); natural key
    rg = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False)  # not unique; names can collide
    address = Column(String(255), nullable=False)

    __table_args__ = (
        Index("ix_authors_name", "name"),
    )
