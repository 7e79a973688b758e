import pytest

from hostel_app.core.security import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_and_verify(hasher):
    hashed = hasher.hash("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert hasher.verify("s3cret-pass", hashed)
    assert not hasher.verify("wrong-pass", hashed)


def test_hashes_are_salted(hasher):
    assert hasher.hash("same") != hasher.hash("same")


def test_empty_password_is_refused(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")


def test_non_string_password_is_refused(hasher):
    with pytest.raises(TypeError):
        hasher.hash(12345)


def test_overlong_password_is_refused(hasher):
    with pytest.raises(ValueError):
        hasher.hash("x" * 73)


def test_verify_with_malformed_hash_is_false(hasher):
    assert not hasher.verify("anything", "not-a-bcrypt-hash")
    assert not hasher.verify("", "whatever")


@pytest.mark.parametrize("rounds", [3, 32])
def test_rounds_out_of_range(rounds):
    with pytest.raises(ValueError):
        PasswordHasher(rounds=rounds)


def test_needs_rehash_tracks_cost_factor(hasher):
    hashed = hasher.hash("pw-value")

    assert not hasher.needs_rehash(hashed)
    assert PasswordHasher(rounds=5).needs_rehash(hashed)
    assert hasher.needs_rehash("garbage")


def test_overlong_password_never_verifies(hasher):
    assert not hasher.verify("x" * 100, hasher.hash("x" * 72))
