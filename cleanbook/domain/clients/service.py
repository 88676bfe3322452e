"""Client service - Business logic for client profile operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client
from .repository import ClientRepository
from .schemas import ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_client(self, client_id: str) -> Client:
        """Get a specific client"""
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """Update a client"""
        client = self.get_client(client_id)
        updates = data.model_dump(exclude_unset=True)
        logger.info(f"📝 Updating client {client_id}: {sorted(updates)}")
        return self.repo.update_client_profile(self.db, client, **updates)
