import os

from kyc_wallet import config


def generate_did(prefix: str = None, hex_length: int = None) -> str:
    prefix = prefix if prefix is not None else config.DID_PREFIX
    hex_length = hex_length if hex_length is not None else config.DID_HEX_LENGTH
    if hex_length <= 0:
        raise ValueError("DID body length must be positive")

    # Random body from the OS CSPRNG, lowercase hex
    body = os.urandom((hex_length + 1) // 2).hex()[:hex_length]
    return f"{prefix}{body}"


def is_did(value: str, prefix: str = None, hex_length: int = None) -> bool:
    prefix = prefix if prefix is not None else config.DID_PREFIX
    hex_length = hex_length if hex_length is not None else config.DID_HEX_LENGTH
    if not value.startswith(prefix):
        return False
    body = value[len(prefix):]
    return len(body) == hex_length and all(c in "0123456789abcdef" for c in body)
