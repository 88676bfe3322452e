"""Collaborator service - Profile and credential operations"""

import logging
from typing import Optional, Protocol

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Collaborator
from ...security_utils import BcryptCredentialVerifier
from ..errors import InvalidCredentialsError
from .repository import CollaboratorRepository
from .schemas import CollaboratorUpdate, PasswordChangeRequest

logger = logging.getLogger(__name__)


class CredentialVerifier(Protocol):
    def hash(self, secret: str) -> str: ...

    def verify(self, secret: str, hashed: Optional[str]) -> bool: ...


class CollaboratorService:
    """Service layer for collaborator profile business logic"""

    def __init__(self, db: Session, verifier: Optional[CredentialVerifier] = None):
        self.db = db
        self.repo = CollaboratorRepository()
        self.verifier = verifier or BcryptCredentialVerifier()

    def get_collaborator(self, collaborator_id: str) -> Collaborator:
        collaborator = self.repo.get_collaborator_by_id(self.db, collaborator_id)
        if not collaborator:
            raise HTTPException(status_code=404, detail="Collaborator not found")
        return collaborator

    def update_profile(self, collaborator_id: str, data: CollaboratorUpdate) -> Collaborator:
        """Update name, contact details and photo; level and password have their own flows"""
        collaborator = self.get_collaborator(collaborator_id)
        return self.repo.update_collaborator_profile(
            self.db, collaborator, **data.model_dump(exclude_unset=True)
        )

    def set_password(self, collaborator: Collaborator, new_password: str) -> Collaborator:
        return self.repo.update_collaborator_profile(
            self.db, collaborator, password_hash=self.verifier.hash(new_password)
        )

    def change_password(self, collaborator_id: str, data: PasswordChangeRequest) -> dict:
        """Verify the current credential before accepting a new one"""
        collaborator = self.get_collaborator(collaborator_id)

        try:
            if not self.verifier.verify(data.current, collaborator.password_hash):
                raise InvalidCredentialsError("Current password is incorrect")
            if data.new != data.confirm:
                raise InvalidCredentialsError("New passwords do not match")
        except InvalidCredentialsError as e:
            logger.warning(f"⚠️ Password change rejected for collaborator {collaborator_id}: {e}")
            raise e.to_http() from e

        self.set_password(collaborator, data.new)
        logger.info(f"✅ Password updated for collaborator {collaborator_id}")
        return {"message": "Password updated successfully"}
