"""SQLAlchemy models mirroring the JSON customer records."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    JSON,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


class CustomerRow(Base):
    __tablename__ = "customers"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    phone_number = Column(String(64), unique=True, nullable=False)
    preferred_styles = Column(JSON, default=list, nullable=False)
    notes = Column(Text, default="", nullable=True)

    visits = relationship(
        "ServiceVisitRow",
        back_populates="customer",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class ServiceVisitRow(Base):
    __tablename__ = "service_visits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(String(64), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    visit_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    services_taken = Column(JSON, default=list, nullable=False)
    notes = Column(Text, default="", nullable=True)

    customer = relationship("CustomerRow", back_populates="visits")
