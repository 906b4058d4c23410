"""
Credential lifecycle.

    PENDING -> INFO_REQUESTED | APPROVED | REJECTED          (issuer)
    INFO_REQUESTED -> REVIEWING                              (holder respond)
    REVIEWING -> INFO_REQUESTED | APPROVED | REJECTED        (issuer)

APPROVED and REJECTED are terminal for issuer and holder actions; an
APPROVED credential can still receive its identifier via issue_identifier.

Every transition returns a new Credential and leaves its argument untouched.
Actions attempted from the wrong state are ignored (the input credential is
returned) unless config.STRICT_TRANSITIONS is set, in which case they raise
IllegalTransition.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from kyc_wallet import config
from kyc_wallet.dids import generate_did
from kyc_wallet.exceptions import IllegalTransition
from kyc_wallet.models import Credential, CredentialStatus, DisclosureResult, KycStatus

log = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset({CredentialStatus.APPROVED, CredentialStatus.REJECTED})


def _illegal(credential: Credential, action: str, reason: str) -> Credential:
    if config.STRICT_TRANSITIONS:
        raise IllegalTransition(action, credential.status.value, reason)
    log.warning("ignoring %s on credential %s: %s", action, credential.id, reason,
                extra={"credential_id": credential.id, "status": credential.status.value})
    return credential


def _transition(credential: Credential, status: CredentialStatus, **changes) -> Credential:
    updated = credential.model_copy(deep=True)
    updated.status = status
    for name, value in changes.items():
        setattr(updated, name, value)
    log.info("credential %s: %s -> %s", credential.id, credential.status.value, status.value,
             extra={"credential_id": updated.id, "status": status.value})
    return updated


def is_terminal(credential: Credential) -> bool:
    return credential.status in TERMINAL_STATUSES


# =============================================================================
# Issuer actions
# =============================================================================


def request_info(credential: Credential, note: str) -> Credential:
    if is_terminal(credential):
        return _illegal(credential, "request", "credential is already final")
    return _transition(credential, CredentialStatus.INFO_REQUESTED, requested_info=[note])


def approve(credential: Credential) -> Credential:
    if is_terminal(credential):
        return _illegal(credential, "approve", "credential is already final")
    updated = _transition(credential, CredentialStatus.APPROVED)
    updated.fields.kyc_status = KycStatus.VERIFIED
    return updated


def reject(credential: Credential) -> Credential:
    if is_terminal(credential):
        return _illegal(credential, "reject", "credential is already final")
    updated = _transition(credential, CredentialStatus.REJECTED)
    updated.fields.kyc_status = KycStatus.REJECTED
    return updated


ISSUER_ACTIONS = {
    "request": lambda credential, note: request_info(credential, note),
    "approve": lambda credential, note: approve(credential),
    "reject": lambda credential, note: reject(credential),
}


def apply_issuer_action(credential: Credential, action: str, note: str = "") -> Credential:
    try:
        handler = ISSUER_ACTIONS[action]
    except KeyError:
        raise ValueError(f"Unknown issuer action: {action!r}") from None
    return handler(credential, note)


# =============================================================================
# Holder actions
# =============================================================================


def respond(credential: Credential, text: str) -> Credential:
    if credential.status != CredentialStatus.INFO_REQUESTED:
        return _illegal(credential, "respond", "no information was requested")
    if not text or not text.strip():
        return _illegal(credential, "respond", "response is empty")
    return _transition(credential, CredentialStatus.REVIEWING, holder_response=text)


# =============================================================================
# Identifier issuance
# =============================================================================


def can_issue_identifier(disclosure: Optional[DisclosureResult], already_issued: bool = False) -> bool:
    if already_issued or disclosure is None:
        return False
    return disclosure.disclosed_fields.get("kyc_status") == KycStatus.VERIFIED


def issue_identifier(
    credential: Credential,
    disclosure: Optional[DisclosureResult],
    already_issued: bool = False,
    now: datetime = None,
) -> Credential:
    """Replace the placeholder id with a fresh DID and finalize the credential.

    `disclosure` must be the most recent disclosure for this credential and
    must have revealed a VERIFIED KYC status. `already_issued` is tracked by
    the caller; once set, further calls return the credential unchanged.
    """
    if not can_issue_identifier(disclosure, already_issued):
        log.info("identifier not issued for credential %s", credential.id,
                 extra={"credential_id": credential.id, "status": credential.status.value})
        return credential

    updated = credential.model_copy(deep=True)
    updated.id = generate_did()
    updated.status = CredentialStatus.APPROVED
    updated.fields.kyc_status = KycStatus.VERIFIED
    updated.issuance_date = now or datetime.now(timezone.utc)

    log.info("issued %s for credential %s", updated.id, credential.id,
             extra={"credential_id": updated.id, "status": updated.status.value})
    return updated
