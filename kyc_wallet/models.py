from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kyc_wallet import config


class CredentialStatus(str, Enum):
    PENDING = "PENDING"
    INFO_REQUESTED = "INFO_REQUESTED"
    REVIEWING = "REVIEWING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class KycStatus(str, Enum):
    VERIFIED = "VERIFIED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


class DisclosureOption(str, Enum):
    ALL = "all"
    KYC_ONLY = "kyc-only"
    AGE_VERIFICATION = "age-verification"
    WEALTH_THRESHOLD = "wealth-threshold"


class Asset(BaseModel):
    name: str
    value: float = 0


class HolderRecord(BaseModel):
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    address: str = ""
    occupation: str = ""
    employer_name: str = ""
    annual_income: float = 0
    date_of_birth: Optional[date] = None
    nationality: str = ""
    languages: List[str] = Field(default_factory=lambda: [config.DEFAULT_LANGUAGE])
    additional_documents: Optional[List[str]] = None
    assets: List[Asset] = Field(default_factory=list)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def blank_date_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("annual_income", mode="before")
    @classmethod
    def blank_income_is_zero(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value


class StoredHolderRecord(HolderRecord):
    id: str  # UUID
    created_at: datetime


class CredentialFields(BaseModel):
    kyc_status: KycStatus = KycStatus.PENDING
    date_of_birth: date
    nationality: str
    languages: List[str]
    net_worth: float


class Credential(BaseModel):
    id: str  # UUID placeholder until a DID is issued
    holder: str
    holder_info: HolderRecord
    issuer: str
    issuance_date: datetime
    status: CredentialStatus = CredentialStatus.PENDING
    requested_info: Optional[List[str]] = None
    holder_response: Optional[str] = None
    fields: CredentialFields


class DisclosureResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    holder: str
    disclosed_fields: Dict[str, Any] = Field(default_factory=dict)
    proofs: Dict[str, Any] = Field(default_factory=dict)


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    reason: str
