"""Status vocabularies shared by the lifecycle, payment and payout domains"""

from enum import Enum


class ServiceStatus(str, Enum):
    PENDING = "PENDING"  # Requested by the client, no approved quote yet
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class PaymentStatus(str, Enum):
    UNPAID = "UNPAID"
    SIGNAL_PAID = "SIGNAL_PAID"
    FULL_PAID = "FULL_PAID"

    @property
    def rank(self) -> int:
        return _PAYMENT_ORDER.index(self)


_PAYMENT_ORDER = [PaymentStatus.UNPAID, PaymentStatus.SIGNAL_PAID, PaymentStatus.FULL_PAID]


class PaymentStage(str, Enum):
    SIGNAL = "SIGNAL"
    FINAL = "FINAL"


class CollaboratorLevel(str, Enum):
    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"
    MASTER = "MASTER"


class ActorRole(str, Enum):
    CLIENT = "CLIENT"
    COLLABORATOR = "COLLABORATOR"
    ADMIN = "ADMIN"


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    FAILED = "FAILED"
