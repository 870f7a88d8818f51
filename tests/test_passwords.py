from memosphere.passwords import hash_password, random_password, verify_password


def test_hash_uses_hash_dot_salt_format():
    stored = hash_password("hunter2")
    hashed, salt = stored.split(".")
    assert len(hashed) == 128
    assert len(salt) == 32
    int(hashed, 16)
    int(salt, 16)


def test_same_password_gets_different_salts():
    assert hash_password("hunter2") != hash_password("hunter2")


def test_verify_password():
    stored = hash_password("hunter2")
    assert verify_password("hunter2", stored)
    assert not verify_password("hunter3", stored)


def test_verify_rejects_malformed_hashes():
    assert not verify_password("hunter2", "")
    assert not verify_password("hunter2", "nodot")
    assert not verify_password("hunter2", "zz-not-hex.abcd")


def test_random_password_is_unique():
    assert random_password() != random_password()
