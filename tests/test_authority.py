import secrets

import pytest

from schnorr_attest.authority import Authority
from schnorr_attest.errors import InvalidKey
from schnorr_attest.registry import NonceRegistry, NonceState

AUTHORITY_KEY = bytes.fromhex("11" * 32)


def random_key() -> bytes:
    # a leading byte below 0xff keeps the key below the curve order
    key = secrets.token_bytes(32)
    return bytes([key[0] % 0xFF]) + key[1:]


def test_derive_public_key_is_deterministic():
    key = random_key()
    assert Authority().derive_public_key(key) == Authority().derive_public_key(key)


def test_different_keys_give_different_public_keys():
    authority = Authority()
    assert authority.derive_public_key(random_key()) != authority.derive_public_key(
        random_key()
    )


def test_sign_and_verify_once():
    authority = Authority()
    signature = authority.sign("Test message", AUTHORITY_KEY)
    assert authority.verify("Test message", signature)
    assert not authority.verify("Test message", signature)


def test_wrong_message_fails():
    authority = Authority()
    signature1 = authority.sign("msg1", AUTHORITY_KEY)
    signature2 = authority.sign("msg2", AUTHORITY_KEY)
    assert signature1.nonce != signature2.nonce
    assert not authority.verify("msg1", signature2)


def test_zero_key_is_rejected():
    authority = Authority()
    with pytest.raises(InvalidKey):
        authority.sign("Test with zero key", bytes(32))
    assert authority.registry.next_nonce == 0


def test_max_value_key_is_rejected():
    with pytest.raises(InvalidKey):
        Authority().derive_public_key(b"\xff" * 32)


def test_int_keys_are_accepted():
    authority = Authority()
    assert authority.derive_public_key(AUTHORITY_KEY) == authority.derive_public_key(
        int.from_bytes(AUTHORITY_KEY, "big")
    )


def test_many_consecutive_signatures():
    authority = Authority()
    signatures = [(f"Message {i}", authority.sign(f"Message {i}", AUTHORITY_KEY)) for i in range(10)]
    assert [sig.nonce for _, sig in signatures] == list(range(10))
    assert all(authority.verify(message, sig) for message, sig in signatures)


def test_double_spend_is_prevented():
    authority = Authority()
    message = "transfer 1000 tokens to Bob"
    signature = authority.sign(message, AUTHORITY_KEY)
    assert authority.verify(message, signature)
    for _ in range(5):
        assert not authority.verify(message, signature)


def test_message_that_is_not_utf8_encodable_fails():
    authority = Authority()
    signature = authority.sign("hello", AUTHORITY_KEY)
    assert not authority.verify("\udfff", signature)
    assert authority.registry.consumed_count == 0


def test_verify_with_public_key():
    authority = Authority()
    signature = authority.sign("hello", random_key())
    assert not authority.verify_with_public_key(
        "hello", signature, authority.derive_public_key(AUTHORITY_KEY)
    )
    assert authority.verify("hello", signature)


def test_restricted_authority_rejects_other_keys():
    authority = Authority.restricted_to(AUTHORITY_KEY)
    outsider = authority.sign("Test with max key", random_key())
    assert not authority.verify("Test with max key", outsider)
    assert authority.registry.state(outsider.nonce) == NonceState.ISSUED

    insider = authority.sign("Test with authority key", AUTHORITY_KEY)
    assert authority.verify("Test with authority key", insider)


def test_independent_authorities_have_independent_registries():
    issuer = Authority()
    verifier = Authority()
    subject = issuer.create_credential_subject(
        "user-integration-001", "Integration", "Tester", "ID-INT-001", 315_532_800_000
    )
    signed = issuer.sign_credential_subject(subject, AUTHORITY_KEY)

    assert verifier.verify_signed_credential(signed)
    assert not verifier.verify_signed_credential(signed)
    assert issuer.verify_signed_credential(signed)


def test_credential_workflow():
    authority = Authority()
    subject = authority.create_credential_subject(
        "user123", "John", "Doe", "SSN-123-45-6789", 631_152_000_000
    )
    digest = authority.hash_credential_subject(subject)
    assert digest == authority.hash_credential_subject(subject)

    signed = authority.sign_credential_subject(subject, AUTHORITY_KEY)
    assert authority.verify_signed_credential_with_public_key(
        signed, authority.derive_public_key(AUTHORITY_KEY)
    )
    assert not authority.verify_signed_credential(signed)


def test_shared_registry():
    registry = NonceRegistry("shared")
    a = Authority(registry=registry)
    b = Authority(registry=registry)
    signature = a.sign("hello", AUTHORITY_KEY)
    assert b.sign("hello", AUTHORITY_KEY).nonce == signature.nonce + 1
    assert a.verify("hello", signature)
    assert not b.verify("hello", signature)


def test_repr():
    assert "any" in repr(Authority())
    assert "authorized_signers=1" in repr(Authority.restricted_to(AUTHORITY_KEY))


if __name__ == "__main__":
    pytest.main()
