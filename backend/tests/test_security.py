import asyncio

import pytest

from hireboard.core import security
from hireboard.core.exceptions import ComparisonError, HashingError
from hireboard.core.passwords import is_password_hashed
from hireboard.core.security import CredentialStore

PASSWORD = "Abcdef1!"


def test_hashes_are_salted_and_both_verify(credentials):
    first = asyncio.run(credentials.hash_password(PASSWORD))
    second = asyncio.run(credentials.hash_password(PASSWORD))

    assert first != second
    assert asyncio.run(credentials.compare_password(PASSWORD, first))
    assert asyncio.run(credentials.compare_password(PASSWORD, second))


def test_hash_is_tagged_and_never_plaintext(credentials):
    stored = asyncio.run(credentials.hash_password(PASSWORD))

    assert stored.startswith("$2b$04$")
    assert is_password_hashed(stored)
    assert PASSWORD not in stored


@pytest.mark.parametrize("other", ["Abcdef1?", "abcdef1!", "Abcdef1! ", ""])
def test_other_passwords_do_not_match(credentials, stored_hash, other):
    assert asyncio.run(credentials.compare_password(other, stored_hash)) is False


@pytest.mark.parametrize("bad_hash", ["not-a-hash", "", "$2b$04$short", PASSWORD])
def test_malformed_hash_is_a_mismatch(credentials, bad_hash):
    assert asyncio.run(credentials.compare_password(PASSWORD, bad_hash)) is False


def test_secret_over_bcrypt_limit_fails_without_leaking(credentials):
    secret = "Aa1!" + "x" * 80

    with pytest.raises(HashingError) as exc_info:
        asyncio.run(credentials.hash_password(secret))

    assert secret not in str(exc_info.value)


def test_non_string_secret_is_a_hashing_error(credentials):
    with pytest.raises(HashingError):
        asyncio.run(credentials.hash_password(None))


def test_compare_fault_is_a_comparison_error(credentials, stored_hash):
    with pytest.raises(ComparisonError):
        asyncio.run(credentials.compare_password(None, stored_hash))


def test_needs_rehash_when_cost_was_raised(stored_hash):
    assert CredentialStore(rounds=5).needs_rehash(stored_hash)
    assert not CredentialStore(rounds=4).needs_rehash(stored_hash)
    assert not CredentialStore(rounds=4).needs_rehash("not-a-hash")


def test_concurrent_hashing_is_independent(credentials):
    async def hash_many():
        return await asyncio.gather(*(credentials.hash_password(PASSWORD) for _ in range(4)))

    hashes = asyncio.run(hash_many())

    assert len(set(hashes)) == 4


def test_module_helpers_use_the_shared_store(monkeypatch):
    monkeypatch.setattr(security, "credential_store", CredentialStore(rounds=4))

    stored = asyncio.run(security.hash_password(PASSWORD))

    assert stored.startswith("$2b$04$")
    assert asyncio.run(security.compare_password(PASSWORD, stored))
    assert not asyncio.run(security.compare_password("Abcdef1?", stored))
