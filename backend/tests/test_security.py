from fittracker.core.security import hash_password, verify_password


def test_hash_roundtrip():
    encoded = hash_password("secret123", iterations=1000)
    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("secret123", encoded)
    assert not verify_password("secret124", encoded)


def test_same_password_gets_different_salt():
    assert hash_password("secret123") != hash_password("secret123")


def test_garbage_hash_never_verifies():
    assert not verify_password("secret123", "secret123")
    assert not verify_password("secret123", "md5$1$abc$def")
    assert not verify_password("secret123", "pbkdf2_sha256$many$abc$def")
