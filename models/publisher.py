from sqlalchemy import Column, Integer, String, Index

from models.base_model import BaseModel, Base


class Publisher(BaseModel, Base):
    __tablename__ = "publishers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    address = Column(String(255), nullable=False)

    __table_args__ = (
        Index("ix_publishers_name", "name"),
    )
