"""Customer data access backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Any, Callable, ContextManager, Mapping, Optional

from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salon.db.models import CustomerRow, ServiceVisitRow
from salon.db.session import get_session
from salon.domain.customers import Customer, ServiceVisit, as_utc, new_customer_id, utc_now
from salon.repositories.base import normalize_changes

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_visit(row: ServiceVisitRow) -> ServiceVisit:
    return ServiceVisit(
        date=as_utc(row.visit_date),
        services_taken=list(row.services_taken or []),
        notes=row.notes or "",
    )


class SQLCustomerRepository:
    """CRUD helpers wrapping the SQLAlchemy session.

    Every public method catches ``SQLAlchemyError`` and answers with the
    not-found sentinel, so callers cannot tell an outage from a missing row.
    """

    backend_name = "sql"

    def __init__(self, session_factory: Callable[[], ContextManager[Session]] = get_session) -> None:
        self._session = session_factory

    # -------------------------- assembly --------------------------
    def _visits_for(self, session: Session, customer_id: str) -> list[ServiceVisit]:
        stmt = (
            select(ServiceVisitRow)
            .where(ServiceVisitRow.customer_id == customer_id)
            .order_by(ServiceVisitRow.visit_date, ServiceVisitRow.id)
        )
        return [_row_to_visit(row) for row in session.execute(stmt).scalars().all()]

    def _assemble(self, session: Session, row: CustomerRow) -> Customer:
        return Customer(
            id=row.id,
            name=row.name,
            phone_number=row.phone_number,
            preferred_styles=list(row.preferred_styles or []),
            service_history=self._visits_for(session, row.id),
            notes=row.notes or "",
        )

    # -------------------------- reads --------------------------
    def list_all(self) -> list[Customer]:
        try:
            with self._session() as session:
                rows = session.execute(select(CustomerRow).order_by(CustomerRow.name)).scalars().all()
                # one visit query per customer
                return [self._assemble(session, row) for row in rows]
        except SQLAlchemyError:
            logger.exception("Error listing customers")
            return []

    def get_by_id(self, customer_id: str) -> Optional[Customer]:
        try:
            with self._session() as session:
                row = session.get(CustomerRow, customer_id)
                return self._assemble(session, row) if row else None
        except SQLAlchemyError:
            logger.exception("Error getting customer %s", customer_id)
            return None

    def get_by_phone(self, phone_number: str) -> Optional[Customer]:
        try:
            with self._session() as session:
                stmt = select(CustomerRow).where(CustomerRow.phone_number == phone_number)
                row = session.execute(stmt).scalars().first()
                return self._assemble(session, row) if row else None
        except SQLAlchemyError:
            logger.exception("Error getting customer by phone %s", phone_number)
            return None

    def search_by_name(self, term: str) -> list[Customer]:
        needle = (term or "").strip()
        if not needle:
            return []
        pattern = f"%{_escape_like(needle)}%"
        try:
            with self._session() as session:
                stmt = (
                    select(CustomerRow)
                    .where(CustomerRow.name.ilike(pattern, escape="\\"))
                    .order_by(CustomerRow.name)
                )
                rows = session.execute(stmt).scalars().all()
                return [self._assemble(session, row) for row in rows]
        except SQLAlchemyError:
            logger.exception("Error searching customers by name %r", term)
            return []

    # -------------------------- writes --------------------------
    def create(
        self,
        name: str,
        phone_number: str,
        preferred_styles: list[str] | None = None,
        notes: str = "",
    ) -> Optional[Customer]:
        entity = CustomerRow(
            id=new_customer_id(),
            name=name,
            phone_number=phone_number,
            preferred_styles=list(preferred_styles or []),
            notes=notes or "",
        )
        try:
            with self._session() as session:
                session.add(entity)
                session.commit()
                session.refresh(entity)
                return self._assemble(session, entity)
        except SQLAlchemyError:
            logger.exception("Error adding customer %r", name)
            return None

    def update(self, customer_id: str, fields: Mapping[str, Any]) -> Optional[Customer]:
        changes = normalize_changes(fields)
        try:
            with self._session() as session:
                if session.get(CustomerRow, customer_id) is None:
                    return None
                if changes:
                    stmt = update(CustomerRow).where(CustomerRow.id == customer_id).values(**changes)
                    session.execute(stmt)
                    session.commit()
                    session.expire_all()
                row = session.get(CustomerRow, customer_id)
                return self._assemble(session, row)
        except SQLAlchemyError:
            logger.exception("Error updating customer %s", customer_id)
            return None

    def add_visit(self, customer_id: str, services_taken: list[str], notes: str = "") -> Optional[ServiceVisit]:
        try:
            with self._session() as session:
                if session.get(CustomerRow, customer_id) is None:
                    return None
                entity = ServiceVisitRow(
                    customer_id=customer_id,
                    visit_date=utc_now(),
                    services_taken=list(services_taken),
                    notes=notes or "",
                )
                session.add(entity)
                session.commit()
                session.refresh(entity)
                return _row_to_visit(entity)
        except SQLAlchemyError:
            logger.exception("Error adding service visit for customer %s", customer_id)
            return None

    def delete(self, customer_id: str) -> bool:
        try:
            with self._session() as session:
                # service_visits rows go through ON DELETE CASCADE
                result = session.execute(delete(CustomerRow).where(CustomerRow.id == customer_id))
                session.commit()
                return bool(result.rowcount)
        except SQLAlchemyError:
            logger.exception("Error deleting customer %s", customer_id)
            return False

    # -------------------------- migration --------------------------
    def sync_customer(self, customer: Customer) -> None:
        """Upsert a full customer aggregate, replacing its stored visits.

        Used by the JSON -> SQL migration; errors propagate to the script.
        """
        with self._session() as session:
            row = session.get(CustomerRow, customer.id)
            if not row:
                row = CustomerRow(id=customer.id)
                session.add(row)
            row.name = customer.name
            row.phone_number = customer.phone_number
            row.preferred_styles = list(customer.preferred_styles)
            row.notes = customer.notes or ""
            session.execute(delete(ServiceVisitRow).where(ServiceVisitRow.customer_id == customer.id))
            for visit in customer.service_history:
                session.add(
                    ServiceVisitRow(
                        customer_id=customer.id,
                        visit_date=as_utc(visit.date),
                        services_taken=list(visit.services_taken),
                        notes=visit.notes or "",
                    )
                )
            session.commit()
