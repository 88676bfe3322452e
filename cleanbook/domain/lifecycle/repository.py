"""Service repository - Database operations for booked services"""

from enum import Enum
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ...models import Service


def _value(status) -> str:
    return status.value if isinstance(status, Enum) else status


class ServiceRepository:
    """Repository for service database operations"""

    @staticmethod
    def get_service_by_id(db: Session, service_id: str) -> Optional[Service]:
        """Get a specific service by ID"""
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def read_services(
        db: Session,
        client_id: Optional[str] = None,
        collaborator_id: Optional[str] = None,
        statuses: Optional[Iterable[str]] = None,
        exclude_statuses: Optional[Iterable[str]] = None,
    ) -> list[Service]:
        """Read services matching a filter, newest job date first"""
        query = db.query(Service)

        if client_id:
            query = query.filter(Service.client_id == client_id)

        if collaborator_id:
            query = query.filter(Service.collaborator_id == collaborator_id)

        if statuses:
            query = query.filter(Service.status.in_([_value(s) for s in statuses]))

        if exclude_statuses:
            query = query.filter(Service.status.notin_([_value(s) for s in exclude_statuses]))

        return query.order_by(Service.date.desc(), Service.created_at.desc()).all()

    @staticmethod
    def update_service_status(db: Session, service: Service, new_status: str, **fields) -> Service:
        """
        Apply a status plus a partial update of other fields.

        Concurrent writers on the same field follow last-write-wins.
        """
        service.status = _value(new_status)
        for key, value in fields.items():
            if hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        """Create a new service"""
        service = Service(**service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service
