from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Contract(BaseModel, Base):
    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    value = Column(Numeric(12, 2), nullable=False)  # validated > 0 and finite (in schema)
    responsible = Column(String(255), nullable=False)
    # Only contracted companies can be referenced
    company_id = Column(
        Integer,
        ForeignKey("contracted_printing_companies.id", ondelete="RESTRICT"),
        nullable=False,
    )

    company = relationship("ContractedPrintingCompany")

    __table_args__ = (
        CheckConstraint("value > 0", name="ck_contracts_value_positive"),
        Index("ix_contracts_company_id", "company_id"),
    )
