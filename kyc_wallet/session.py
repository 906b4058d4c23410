import logging
from typing import Optional, Set

from kyc_wallet import config, lifecycle, storage
from kyc_wallet.credentials import create_credential
from kyc_wallet.models import Asset, Credential, DisclosureResult, FieldError, HolderRecord
from kyc_wallet.presentation import disclose
from kyc_wallet.validation import validate

log = logging.getLogger(__name__)


class KycSession:
    """One holder/issuer session with a single active credential.

    Holds the holder's draft, the current credential, the latest disclosure
    and whether a DID has already been issued. Every credential change goes
    through kyc_wallet.lifecycle and replaces `credential` with the result.
    """

    def __init__(self):
        self.draft = HolderRecord()
        self.credential: Optional[Credential] = None
        self.disclosure: Optional[DisclosureResult] = None
        self.has_issued = False
        self._wealth_threshold = config.DEFAULT_WEALTH_THRESHOLD

    def start(self):
        storage.init_db()
        saved = storage.load_draft()
        if saved is not None:
            self.draft = saved

    # --- Holder form

    def update_draft(self, **changes) -> HolderRecord:
        self.draft = HolderRecord.model_validate({**self.draft.model_dump(), **changes})
        storage.save_draft(self.draft)
        return self.draft

    def add_asset(self, name: str, value: float) -> bool:
        if not name or not name.strip() or not value > 0:
            return False
        self.update_draft(assets=[*self.draft.assets, Asset(name=name, value=value)])
        return True

    def remove_asset(self, index: int):
        assets = list(self.draft.assets)
        del assets[index]
        self.update_draft(assets=assets)

    def submit(self) -> Set[FieldError]:
        """Validate and persist the draft, then create a fresh credential.

        Returns the validation errors (nothing is created when there are
        any). StorageError from the persistence layer propagates and leaves
        the session as it was.
        """
        errors = validate(self.draft)
        if errors:
            log.info("holder submission rejected: %s", ", ".join(sorted(e.field for e in errors)))
            return errors

        storage.persist(self.draft)

        self.credential = create_credential(self.draft)
        self.disclosure = None
        self.has_issued = False

        self.draft = HolderRecord()
        storage.clear_draft()
        return errors

    # --- Issuer / holder actions

    def _require_credential(self) -> Credential:
        if self.credential is None:
            raise LookupError("No credential in this session")
        return self.credential

    def issuer_action(self, action: str, note: str = "") -> Credential:
        self.credential = lifecycle.apply_issuer_action(self._require_credential(), action, note)
        return self.credential

    def respond(self, text: str) -> Credential:
        self.credential = lifecycle.respond(self._require_credential(), text)
        return self.credential

    # --- Disclosure

    @property
    def wealth_threshold(self) -> float:
        return self._wealth_threshold

    @wealth_threshold.setter
    def wealth_threshold(self, value: float):
        self._wealth_threshold = max(0, value)

    def disclose(self, option, today=None) -> DisclosureResult:
        self.disclosure = disclose(self._require_credential(), option, self.wealth_threshold, today=today)
        return self.disclosure

    def issue_credential(self) -> Credential:
        credential = self._require_credential()
        issued = lifecycle.issue_identifier(credential, self.disclosure, self.has_issued)
        # issue_identifier hands back the same object when it refuses
        if issued is not credential:
            self.credential = issued
            self.has_issued = True
        return self.credential
