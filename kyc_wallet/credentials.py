import logging
from datetime import datetime, timezone
from uuid import uuid4

from kyc_wallet import config
from kyc_wallet.models import Credential, CredentialFields, CredentialStatus, HolderRecord, KycStatus

log = logging.getLogger(__name__)


def compute_net_worth(record: HolderRecord) -> float:
    # Income is weighted as liquid-equivalent wealth, then stated assets are added
    total_assets = sum(asset.value for asset in record.assets)
    return record.annual_income * config.INCOME_MULTIPLIER + total_assets


def create_credential(record: HolderRecord, now: datetime = None) -> Credential:
    """Build a PENDING credential from an already validated holder record.

    The credential keeps its own copy of the record, so later edits to the
    holder's draft do not leak into it.
    """
    holder_info = record.model_copy(deep=True)

    credential = Credential(
        id=str(uuid4()),
        holder=holder_info.full_name,
        holder_info=holder_info,
        issuer=config.ISSUER_NAME,
        issuance_date=now or datetime.now(timezone.utc),
        status=CredentialStatus.PENDING,
        fields=CredentialFields(
            kyc_status=KycStatus.PENDING,
            date_of_birth=holder_info.date_of_birth or config.DEFAULT_DATE_OF_BIRTH,
            nationality=holder_info.nationality or config.DEFAULT_NATIONALITY,
            languages=list(holder_info.languages) or [config.DEFAULT_LANGUAGE],
            net_worth=compute_net_worth(holder_info),
        ),
    )

    log.info("created credential %s", credential.id,
             extra={"credential_id": credential.id, "status": credential.status.value})
    return credential
