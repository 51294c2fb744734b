"""Password hashing tests."""

from todolist.auth.password import hash_password, verify_password


def test_hash_is_bcrypt_with_requested_cost():
    h = hash_password("secret12", rounds=4)
    assert h.startswith("$2b$04$")
    assert "secret12" not in h


def test_verify_roundtrip():
    h = hash_password("secret12", rounds=4)
    assert verify_password("secret12", h) is True
    assert verify_password("secret13", h) is False


def test_verify_against_malformed_hash_is_false():
    assert verify_password("secret12", "not-a-bcrypt-hash") is False


def test_same_password_gets_different_salts():
    assert hash_password("secret12", rounds=4) != hash_password("secret12", rounds=4)
