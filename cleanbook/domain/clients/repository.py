"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_client_by_id(db: Session, client_id: str) -> Optional[Client]:
        """Get a specific client by ID"""
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        """Create a new client"""
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client_profile(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client
