import pytest

from shortlink.app.services.password_hasher import PasswordHasher


def test_hash_then_verify(hasher: PasswordHasher):
    hashed = hasher.hash("correct-horse")

    assert hashed != "correct-horse"
    assert hashed.startswith("$2")
    assert hasher.verify("correct-horse", hashed)
    assert not hasher.verify("wrong-horse", hashed)


def test_hash_embeds_cost_factor(hasher: PasswordHasher):
    assert hasher.hash("correct-horse").split("$")[2] == "04"


def test_empty_password_cannot_be_hashed(hasher: PasswordHasher):
    with pytest.raises(ValueError):
        hasher.hash("")


@pytest.mark.parametrize("stored", ["", "not-a-hash", "$2b$04$tooshort"])
def test_verify_never_raises_on_malformed_hash(hasher: PasswordHasher, stored):
    assert hasher.verify("correct-horse", stored) is False


def test_verify_rejects_empty_password(hasher: PasswordHasher):
    assert hasher.verify("", hasher.hash("correct-horse")) is False


def test_prepare_keeps_existing_bcrypt_hash(hasher: PasswordHasher):
    existing = hasher.hash("correct-horse")

    assert hasher.is_already_hashed(existing)
    assert hasher.prepare(existing) == existing


def test_prepare_hashes_plain_password(hasher: PasswordHasher):
    prepared = hasher.prepare("correct-horse")

    assert hasher.is_already_hashed(prepared)
    assert hasher.verify("correct-horse", prepared)


def test_passwords_beyond_72_bytes_are_truncated(hasher: PasswordHasher):
    long_password = "x" * 100
    hashed = hasher.hash(long_password)

    assert hasher.verify("x" * 72, hashed)


def test_hash_with_trailing_newline_is_not_already_hashed(hasher: PasswordHasher):
    tampered = hasher.hash("correct-horse") + "\n"

    assert not hasher.is_already_hashed(tampered)
    prepared = hasher.prepare(tampered)
    assert prepared != tampered
    assert hasher.verify(tampered, prepared)
