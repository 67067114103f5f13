from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from aichat.application.services.password_hashing import BcryptPasswordHasher
from aichat.application.services.session_manager import SessionManager
from aichat.application.use_cases.users.register_user import RegisterUserUseCase
from aichat.domain.users.exceptions import InsufficientCreditsError, UserAlreadyExistsError
from aichat.infrastructure.db import Database
from aichat.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository, SqlAlchemyUserRepository)


@pytest.fixture()
def users(database: Database) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(database)


def test_add_applies_defaults_and_normalizes_email(users: SqlAlchemyUserRepository) -> None:
    user = users.add("  Alice@Example.COM ", "hash")

    assert user.email == "alice@example.com"
    assert user.credits == 10
    assert user.is_premium is False
    assert len(user.id) == 32
    assert user.created_at.tzinfo is not None


def test_find_by_email_is_case_insensitive(users: SqlAlchemyUserRepository) -> None:
    created = users.add("alice@example.com", "hash")

    assert users.find_by_email("ALICE@example.com ") == created
    assert users.find_by_id(created.id) == created
    assert users.find_by_email("bob@example.com") is None
    assert users.find_by_id("0" * 32) is None


def test_unique_constraint_rejects_duplicate(users: SqlAlchemyUserRepository) -> None:
    users.add("alice@example.com", "hash")

    with pytest.raises(UserAlreadyExistsError):
        users.add(" ALICE@example.com", "other-hash")


def test_concurrent_registrations_have_one_winner(database: Database) -> None:
    use_case = RegisterUserUseCase(
        users=SqlAlchemyUserRepository(database),
        sessions=SessionManager(sessions=SqlAlchemySessionRepository(database)),
        password_hasher=BcryptPasswordHasher(rounds=4),
    )
    variants = ["race@example.com", " RACE@example.com", "Race@Example.com ", "race@EXAMPLE.com"]
    barrier = threading.Barrier(len(variants))

    def attempt(email: str) -> str:
        barrier.wait()
        try:
            use_case.execute(email, "hunter2")
        except UserAlreadyExistsError:
            return "duplicate"
        return "created"

    with ThreadPoolExecutor(max_workers=len(variants)) as pool:
        outcomes = list(pool.map(attempt, variants))

    assert outcomes.count("created") == 1
    assert outcomes.count("duplicate") == len(variants) - 1


def test_spend_credit_stops_at_zero(users: SqlAlchemyUserRepository) -> None:
    user = users.add("alice@example.com", "hash")

    for expected in range(9, -1, -1):
        spent = users.spend_credit(user.id)
        assert spent is not None
        assert spent.credits == expected

    with pytest.raises(InsufficientCreditsError):
        users.spend_credit(user.id)

    reloaded = users.find_by_id(user.id)
    assert reloaded is not None
    assert reloaded.credits == 0


def test_credit_operations_on_unknown_user(users: SqlAlchemyUserRepository) -> None:
    assert users.spend_credit("missing") is None
    assert users.add_credits("missing", 5) is None
    assert users.set_premium("missing", True) is None


def test_add_credits_and_premium(users: SqlAlchemyUserRepository) -> None:
    user = users.add("alice@example.com", "hash")

    topped_up = users.add_credits(user.id, 50)
    premium = users.set_premium(user.id, True)

    assert topped_up is not None and topped_up.credits == 60
    assert premium is not None and premium.is_premium is True

    with pytest.raises(ValueError):
        users.add_credits(user.id, 0)
