import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.exceptions import EmailTakenError, InvalidCredentialsError
from models import Base
from repositories import UserRepository
from schemas.user import LoginRequest, RegisterRequest
from utils.auth_manager import AuthManager
from utils.clock import MonotonicClock


@pytest.fixture
def manager(session, token_provider, password_hasher, clock):
    return AuthManager(session, token_provider, password_hasher, clock)


def _register(email="race@its.test", role="instructor"):
    return RegisterRequest(email=email, password="secret1", role=role)


def test_register_stores_hash_and_lowercase_email(manager, session, password_hasher):
    response = manager.register(_register(email="Race@ITS.test"))
    user = UserRepository(session).find_by_id(response.user.id)
    assert user.email == "race@its.test"
    assert user.password_hash != "secret1"
    assert password_hasher.verify("secret1", user.password_hash)
    assert response.user.role.value == "INSTRUCTOR"


def test_register_race_lets_only_one_insert(manager, monkeypatch):
    manager.register(_register())
    # The second caller passed the existence check before the first committed
    monkeypatch.setattr(manager.users, "exists_by_email", lambda email: False)
    with pytest.raises(EmailTakenError):
        manager.register(_register())
    assert len(manager.users.find_all()) == 1


def test_login_of_deactivated_user_fails(manager, session):
    response = manager.register(_register())
    user = UserRepository(session).find_by_id(response.user.id)
    user.active = False
    session.commit()
    with pytest.raises(InvalidCredentialsError):
        manager.login(LoginRequest(email="race@its.test", password="secret1"))


def test_unknown_email_still_checks_a_hash(manager, password_hasher, monkeypatch):
    calls = []
    original = password_hasher.verify

    def spy(password, hashed):
        calls.append(hashed)
        return original(password, hashed)

    monkeypatch.setattr(password_hasher, "verify", spy)
    with pytest.raises(InvalidCredentialsError):
        manager.login(LoginRequest(email="nobody@its.test", password="secret1"))
    assert calls == [None]


def test_registration_race_hits_unique_index(tmp_path, token_provider, password_hasher):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    clock = MonotonicClock()
    session_a, session_b = Session(), Session()
    try:
        first = AuthManager(session_a, token_provider, password_hasher, clock)
        second = AuthManager(session_b, token_provider, password_hasher, clock)
        check_email = second.users.exists_by_email
        winners = []

        def check_then_lose_race(email):
            # The other request commits between this check and our insert
            taken = check_email(email)
            winners.append(first.register(_register()))
            return taken

        second.users.exists_by_email = check_then_lose_race
        with pytest.raises(EmailTakenError):
            second.register(_register())

        assert len(winners) == 1
        assert [u.id for u in UserRepository(session_b).find_all()] == [winners[0].user.id]
    finally:
        session_a.close()
        session_b.close()
        engine.dispose()
