import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cleanbook.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))

# Frontend base URL for links in emails
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Resend Email Configuration
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "CleanBook <noreply@cleanbook.app>")
# Who reviews client-submitted payment proofs
PAYMENT_REVIEWER_EMAIL = os.getenv("PAYMENT_REVIEWER_EMAIL")

# Payout engine
# Amount paid when the rate table has no row/bucket for a collaborator level
PAYOUT_FALLBACK_AMOUNT = float(os.getenv("PAYOUT_FALLBACK_AMOUNT", "80"))
# Used when a service duration is missing or cannot be parsed
DEFAULT_DURATION_HOURS = int(os.getenv("DEFAULT_DURATION_HOURS", "4"))

# CORS - comma separated list of frontend origins
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
