"""Verifiable KYC credential issuance and selective disclosure."""

__version__ = "0.1.0"
