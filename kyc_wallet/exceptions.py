"""
KYC wallet exceptions.

Field-level validation problems are returned as FieldError sets, never
raised; see kyc_wallet.validation.
"""


class StorageError(Exception):
    """The persistence collaborator failed to write.

    The in-memory credential state is unaffected; the caller should offer
    a retry.
    """


class IllegalTransition(Exception):
    """A lifecycle action was attempted from a state that does not allow it.

    Only raised when strict transitions are enabled; by default the action
    is ignored.
    """

    def __init__(self, action: str, status: str, reason: str = ""):
        self.action = action
        self.status = status
        self.reason = reason
        message = f"Cannot {action} a credential in status {status}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
