"""
KYC wallet configuration.

Fixed issuance rules first, then deployment settings read from the
environment.
"""

import os
from datetime import date

# =============================================================================
# ISSUANCE RULES
# =============================================================================

# Net worth = annual income * INCOME_MULTIPLIER + total asset value
INCOME_MULTIPLIER: int = 3

DEFAULT_WEALTH_THRESHOLD: float = 1_000_000

# Fallbacks used when the holder left a field empty
DEFAULT_DATE_OF_BIRTH: date = date(1990, 1, 1)
DEFAULT_NATIONALITY: str = "Not Specified"
DEFAULT_LANGUAGE: str = "English"

# did:ethr:<24 hex chars>
DID_PREFIX: str = "did:ethr:"
DID_HEX_LENGTH: int = 24

# =============================================================================
# OPERATIONAL (env vars)
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "postgresql://localhost/kyc_wallet")

ISSUER_NAME: str = os.getenv("KYC_ISSUER_NAME", "Terminal3 Bank")

# false (default): out-of-order holder/issuer actions are ignored and logged
# true: they raise IllegalTransition
STRICT_TRANSITIONS: bool = os.getenv("KYC_STRICT_TRANSITIONS", "false").lower() == "true"

LOG_LEVEL: str = os.getenv("KYC_LOG_LEVEL", "INFO").upper()
LOG_FILE: str = os.getenv("KYC_LOG_FILE", "")
