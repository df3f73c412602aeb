"""
Printing companies: one base table plus exactly one specialization table.

Joined-table inheritance keyed on `kind`. The specialization is chosen by the
class used at creation and never changes afterwards.
"""
from enum import Enum

from sqlalchemy import Column, Integer, String, ForeignKey, Index

from models.base_model import BaseModel, Base


class CompanyKind(str, Enum):
    PRIVATE = "private"
    CONTRACTED = "contracted"


class PrintingCompany(BaseModel, Base):
    __tablename__ = "printing_companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    kind = Column(String(16), nullable=False)

    __mapper_args__ = {
        "polymorphic_on": kind,
        "polymorphic_identity": "printing_company",
    }

    __table_args__ = (
        Index("ix_printing_companies_name", "name"),
    )

    @property
    def is_private(self) -> bool:
        return self.kind == CompanyKind.PRIVATE.value

    @property
    def is_contracted(self) -> bool:
        return self.kind == CompanyKind.CONTRACTED.value


class PrivatePrintingCompany(PrintingCompany):
    __tablename__ = "private_printing_companies"

    id = Column(Integer, ForeignKey("printing_companies.id", ondelete="CASCADE"), primary_key=True)

    __mapper_args__ = {"polymorphic_identity": CompanyKind.PRIVATE.value}


class ContractedPrintingCompany(PrintingCompany):
    __tablename__ = "contracted_printing_companies"

    id = Column(Integer, ForeignKey("printing_companies.id", ondelete="CASCADE"), primary_key=True)
    address = Column(String(255), nullable=False)

    __mapper_args__ = {"polymorphic_identity": CompanyKind.CONTRACTED.value}
