import uuid

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .domain.enums import (
    CollaboratorLevel,
    PaymentStatus,
    ServiceStatus,
    TransactionStatus,
)


def generate_public_id():
    """Generate a unique public ID for secure public access"""
    return str(uuid.uuid4())


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    phone = Column(String(50), nullable=True)
    photo = Column(Text, nullable=True)  # Data URL or storage key
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    services = relationship("Service", back_populates="client")


class Collaborator(Base):
    __tablename__ = "collaborators"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    phone = Column(String(50), nullable=True)
    password_hash = Column(String(255), nullable=True)  # bcrypt, never plaintext
    photo = Column(Text, nullable=True)
    # JUNIOR, SENIOR, MASTER - missing values are read as JUNIOR
    level = Column(String(20), default=CollaboratorLevel.JUNIOR.value, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    services = relationship("Service", back_populates="collaborator")


class Service(Base):
    """One requested/booked cleaning job"""

    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_public_id)

    # Relationships
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    collaborator_id = Column(String(36), ForeignKey("collaborators.id"), nullable=True, index=True)
    client_name = Column(String(255), nullable=True)
    collaborator_name = Column(String(255), nullable=True)

    # Descriptive
    type = Column(String(100), nullable=True)
    date = Column(String(20), nullable=True)  # ISO date of the job
    time = Column(String(10), nullable=True)  # HH:MM format
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    duration = Column(String(20), nullable=True)  # Hours descriptor, e.g. "4", "6h"

    # Status workflow: PENDING → SCHEDULED → IN_PROGRESS → COMPLETED
    # CANCELED can be reached from any non-terminal status
    status = Column(String(20), default=ServiceStatus.PENDING.value, nullable=False, index=True)

    # Pricing - set once the quote is approved; stage amounts are price / 2, never stored
    price = Column(Float, nullable=True)

    # Payment tracking: UNPAID → SIGNAL_PAID → FULL_PAID, forward only
    payment_status = Column(String(20), default=PaymentStatus.UNPAID.value, nullable=False)
    payment_link_signal = Column(Text, nullable=True)
    payment_link_final = Column(Text, nullable=True)

    # Client-submitted proof of payment, pending admin validation
    proof_signal = Column(Text, nullable=True)
    proof_final = Column(Text, nullable=True)
    proof_signal_submitted_at = Column(DateTime(timezone=True), nullable=True)
    proof_final_submitted_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="services")
    collaborator = relationship("Collaborator", back_populates="services")


class PlatformSettings(Base):
    """Single-row platform configuration (id=1)"""

    __tablename__ = "platform_settings"

    id = Column(Integer, primary_key=True)
    # {"junior": {"hours4": 60, "hours6": 90, "hours8": 120}, "senior": {...}, "master": {...}}
    payouts = Column(JSON, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Transaction(Base):
    """Financial ledger entry: client income or collaborator payout"""

    __tablename__ = "transactions"

    id = Column(String(64), primary_key=True)
    type = Column(String(20), nullable=False, index=True)  # INCOME, EXPENSE
    service_id = Column(String(36), ForeignKey("services.id"), nullable=True, index=True)
    entity = Column(String(255), nullable=True)  # Client or collaborator name
    service_type = Column(String(255), nullable=True)
    amount = Column(Float, nullable=False, default=0)
    date = Column(String(20), nullable=False)
    status = Column(String(20), default=TransactionStatus.PENDING.value, nullable=False)
    method = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
