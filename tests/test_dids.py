"""Tests for DID generation."""

import re

import pytest

from kyc_wallet.dids import generate_did, is_did


def test_format():
    did = generate_did()
    assert re.fullmatch(r"did:ethr:[0-9a-f]{24}", did)
    assert is_did(did)


def test_custom_prefix_and_length():
    did = generate_did(prefix="did:example:", hex_length=7)
    assert did.startswith("did:example:")
    assert len(did) == len("did:example:") + 7
    assert is_did(did, prefix="did:example:", hex_length=7)
    assert not is_did(did, prefix="did:example:")


def test_non_positive_length_is_rejected():
    with pytest.raises(ValueError):
        generate_did(hex_length=0)


def test_unique():
    assert len({generate_did() for _ in range(1000)}) == 1000


def test_is_did_rejects_other_values():
    assert not is_did("3f1c0a6e-0000-4000-8000-000000000000")
    assert not is_did("did:ethr:XYZ")
    assert not is_did("did:ethr:" + "a" * 23)
