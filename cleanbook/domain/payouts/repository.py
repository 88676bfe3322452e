"""Platform settings repository - Database operations for the payout rate table"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import PlatformSettings
from .rate_table import DEFAULT_PAYOUTS

SETTINGS_ROW_ID = 1


class SettingsRepository:
    """Repository for platform settings"""

    @staticmethod
    def get_settings(db: Session) -> Optional[PlatformSettings]:
        """Get the single settings row"""
        return db.query(PlatformSettings).filter(PlatformSettings.id == SETTINGS_ROW_ID).first()

    @staticmethod
    def read_collaborator_settings(db: Session) -> dict:
        """Settings as seen by collaborator screens: {"payouts": rate table}"""
        settings = SettingsRepository.get_settings(db)
        if not settings or not settings.payouts:
            return {"payouts": DEFAULT_PAYOUTS}
        return {"payouts": settings.payouts}

    @staticmethod
    def ensure_defaults(db: Session) -> PlatformSettings:
        """Seed the settings row with the default rate table when missing"""
        settings = SettingsRepository.get_settings(db)
        if settings:
            return settings

        settings = PlatformSettings(id=SETTINGS_ROW_ID, payouts=DEFAULT_PAYOUTS)
        db.add(settings)
        db.commit()
        db.refresh(settings)
        return settings

    @staticmethod
    def update_payouts(db: Session, payouts: dict) -> PlatformSettings:
        """Replace the rate table"""
        settings = SettingsRepository.ensure_defaults(db)
        settings.payouts = payouts
        db.commit()
        db.refresh(settings)
        return settings
