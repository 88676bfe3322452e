"""Collaborator repository - Database operations for collaborators"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Collaborator


class CollaboratorRepository:
    """Repository for collaborator database operations"""

    @staticmethod
    def get_collaborator_by_id(db: Session, collaborator_id: str) -> Optional[Collaborator]:
        return db.query(Collaborator).filter(Collaborator.id == collaborator_id).first()

    @staticmethod
    def create_collaborator(db: Session, **collaborator_data) -> Collaborator:
        collaborator = Collaborator(**collaborator_data)
        db.add(collaborator)
        db.commit()
        db.refresh(collaborator)
        return collaborator

    @staticmethod
    def update_collaborator_profile(db: Session, collaborator: Collaborator, **updates) -> Collaborator:
        """Update a collaborator with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(collaborator, key):
                setattr(collaborator, key, value)

        db.commit()
        db.refresh(collaborator)
        return collaborator
