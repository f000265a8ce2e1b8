import secrets

import pytest

from schnorr_attest.errors import InvalidKey
from schnorr_attest.register import Register, derive_pk, scalar_from_bytes
from schnorr_attest.secp256k1 import CurvePoint, curve_order, field_prime, g1_point, identity

AUTHORITY_KEY = bytes.fromhex("11" * 32)


def random_scalar() -> int:
    return secrets.randbelow(curve_order - 1) + 1


def test_derive_pk_is_deterministic():
    sk = random_scalar()
    assert derive_pk(sk) == derive_pk(sk)


def test_different_keys_give_different_public_keys():
    assert derive_pk(random_scalar()) != derive_pk(random_scalar())


def test_derive_pk_matches_generator():
    assert derive_pk(1) == g1_point(1)


@pytest.mark.parametrize("sk", [0, -1, curve_order, curve_order + 1])
def test_derive_pk_rejects_out_of_range(sk):
    with pytest.raises(InvalidKey):
        derive_pk(sk)


def test_derive_pk_accepts_largest_scalar():
    g = g1_point(1)
    assert derive_pk(curve_order - 1) == CurvePoint(g.x, field_prime - g.y)


def test_derive_pk_rejects_non_int():
    with pytest.raises(InvalidKey):
        derive_pk(True)
    with pytest.raises(InvalidKey):
        derive_pk("11")


def test_zero_filled_key_is_rejected():
    with pytest.raises(InvalidKey):
        scalar_from_bytes(bytes(32))


def test_max_value_key_is_rejected():
    with pytest.raises(InvalidKey):
        scalar_from_bytes(b"\xff" * 32)


def test_wrong_length_key_is_rejected():
    with pytest.raises(InvalidKey):
        scalar_from_bytes(b"\x11" * 31)


def test_authority_key_parses_big_endian():
    assert scalar_from_bytes(AUTHORITY_KEY) == int("11" * 32, 16)


def test_invalid_key_is_a_value_error():
    with pytest.raises(ValueError):
        scalar_from_bytes(bytes(32))


def test_alice_is_not_bob():
    alice = Register(x=1234567890)
    bob = Register(x=987654321)
    assert alice != bob


def test_register_from_secret_key():
    user = Register.from_secret_key(AUTHORITY_KEY)
    assert user.u == derive_pk(int("11" * 32, 16))
    assert user.secret_known


def test_public_only_register():
    user = Register.from_public(g1_point(42))
    assert user.x is None
    assert not user.secret_known
    assert user == Register.from_public(g1_point(42))


def test_public_only_register_needs_a_point():
    with pytest.raises(ValueError):
        Register()
    with pytest.raises(InvalidKey):
        Register.from_public(identity)


def test_repr_hides_secret():
    user = Register(x=1234567890)
    assert "1234567890" not in repr(user)


if __name__ == "__main__":
    pytest.main()
