"""Payout settings router - Admin management of the collaborator rate table"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, require_role
from ...database import get_db
from ..enums import ActorRole
from .rate_table import RateTable
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/payouts", response_model=RateTable)
async def get_payout_table(
    actor: Actor = Depends(require_role(ActorRole.ADMIN, ActorRole.COLLABORATOR)),
    db: Session = Depends(get_db),
):
    """Current rate table; falls back to the defaults when none is stored"""
    return SettingsRepository.read_collaborator_settings(db)["payouts"]


@router.put("/payouts", response_model=RateTable)
async def update_payout_table(
    data: RateTable,
    actor: Actor = Depends(require_role(ActorRole.ADMIN)),
    db: Session = Depends(get_db),
):
    """Replace the rate table used for every payout computed from now on"""
    settings = SettingsRepository.update_payouts(db, data.model_dump())
    logger.info(f"⚙️ Payout table updated by {actor.id}")
    return settings.payouts
