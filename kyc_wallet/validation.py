import math
import re
from typing import Set

from kyc_wallet.models import FieldError, HolderRecord

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_TEXT_FIELDS = (
    ("full_name", "Full name is required"),
    ("email", "Email is required"),
    ("phone_number", "Phone number is required"),
    ("address", "Address is required"),
    ("occupation", "Occupation is required"),
    ("employer_name", "Employer name is required"),
    ("nationality", "Nationality is required"),
)


def validate(record: HolderRecord) -> Set[FieldError]:
    """Return every problem with `record`; an empty set means it can be submitted."""
    errors = set()

    for name, reason in REQUIRED_TEXT_FIELDS:
        if not getattr(record, name).strip():
            errors.add(FieldError(field=name, reason=reason))

    if record.email.strip() and not EMAIL_PATTERN.match(record.email):
        errors.add(FieldError(field="email", reason="Invalid email format"))

    # NaN and infinity are not a real income
    if not math.isfinite(record.annual_income) or record.annual_income <= 0:
        errors.add(FieldError(field="annual_income", reason="Valid annual income is required"))

    if record.date_of_birth is None:
        errors.add(FieldError(field="date_of_birth", reason="Date of birth is required"))

    for i, asset in enumerate(record.assets):
        if not asset.name.strip():
            errors.add(FieldError(field=f"assets[{i}].name", reason="Asset name is required"))
        if not math.isfinite(asset.value):
            errors.add(FieldError(field=f"assets[{i}].value", reason="Valid asset value is required"))
        elif asset.value < 0:
            errors.add(FieldError(field=f"assets[{i}].value", reason="Asset value cannot be negative"))

    return errors
