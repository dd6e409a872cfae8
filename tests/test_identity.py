import logging

import pytest
from sqlalchemy import text
from sqlmodel import Session

import codec
import config
import services.identity as identity_service
from errors import AuthenticationError, NotFoundError, StoreUnavailableError, ValidationError
from schemas import User


def test_login_registers_new_user(store):
    user_id = identity_service.login(store, 'alice', 'key1')
    assert identity_service.get_name(store, user_id) == 'alice'
    assert store.get_user_key(user_id) == 'key1'

    with Session(store.engine) as session:
        user = session.get(User, user_id)
        assert user.country == config.PLACEHOLDER_LOCATION
        assert user.city == config.PLACEHOLDER_LOCATION


def test_login_returns_existing_id_without_key_check(store, caplog):
    first = identity_service.login(store, 'alice', 'key1')
    with caplog.at_level(logging.WARNING, logger='services.identity'):
        second = identity_service.login(store, 'alice', 'key2')

    assert first == second
    assert 'Security key mismatch' in caplog.text
    assert store.get_user_key(first) == 'key1'


def test_login_same_key_logs_nothing(store, caplog):
    first = identity_service.login(store, 'alice', 'key1')
    with caplog.at_level(logging.WARNING, logger='services.identity'):
        assert identity_service.login(store, 'alice', 'key1') == first
    assert 'mismatch' not in caplog.text


def test_login_strict_key_check(store, monkeypatch):
    monkeypatch.setattr(config, 'VERIFY_SECURITY_KEY', True)
    user_id = identity_service.login(store, 'alice', 'key1')
    assert identity_service.login(store, 'alice', 'key1') == user_id
    with pytest.raises(AuthenticationError):
        identity_service.login(store, 'alice', 'key2')


def test_login_distinct_users(store):
    assert identity_service.login(store, 'alice', 'k') != identity_service.login(store, 'bob', 'k')


@pytest.mark.parametrize('username', ['', '   ', None])
def test_login_requires_username(store, username):
    with pytest.raises(ValidationError):
        identity_service.login(store, username, 'key1')


def test_registration_requires_security_key(store):
    with pytest.raises(ValidationError):
        identity_service.login(store, 'alice', '')
    assert not store.user_exists('alice')


def test_existing_user_login_with_empty_key(store):
    user_id = identity_service.login(store, 'alice', 'key1')
    assert identity_service.login(store, 'alice', '') == user_id


def test_set_name(store):
    user_id = identity_service.login(store, 'alice', 'key1')
    identity_service.set_name(store, user_id, 'bob')
    assert identity_service.get_name(store, user_id) == 'bob'


@pytest.mark.parametrize('name', ['', '  \t'])
def test_set_name_rejects_empty(store, name):
    user_id = identity_service.login(store, 'alice', 'key1')
    with pytest.raises(ValidationError):
        identity_service.set_name(store, user_id, name)
    assert identity_service.get_name(store, user_id) == 'alice'


def test_photo(store):
    user_id = identity_service.login(store, 'alice', 'key1')
    assert codec.decode(identity_service.get_photo(store, user_id)).size == (100, 100)

    identity_service.set_photo(store, user_id, b'\x00\x01\x02')
    assert identity_service.get_photo(store, user_id) == b'\x00\x01\x02'

    with pytest.raises(ValidationError):
        identity_service.set_photo(store, user_id, b'')


def test_unknown_user(store):
    with pytest.raises(NotFoundError):
        identity_service.get_name(store, 7)
    with pytest.raises(NotFoundError):
        identity_service.set_name(store, 7, 'bob')
    with pytest.raises(NotFoundError):
        identity_service.get_photo(store, 7)
    with pytest.raises(NotFoundError):
        identity_service.set_photo(store, 7, b'abc')


def test_liveness(store):
    identity_service.liveness(store)


def _corrupt_key(store, user_id):
    with store.engine.begin() as conn:
        conn.execute(text("UPDATE users SET security_key = 'enc:garbage' WHERE id = :id"), {'id': user_id})


def test_login_with_undecryptable_key(store, caplog):
    user_id = identity_service.login(store, 'alice', 'k1')
    _corrupt_key(store, user_id)

    with caplog.at_level(logging.WARNING, logger='services.identity'):
        assert identity_service.login(store, 'alice', 'k1') == user_id
    assert 'unreadable' in caplog.text


def test_strict_login_with_undecryptable_key(store, monkeypatch):
    user_id = identity_service.login(store, 'alice', 'k1')
    _corrupt_key(store, user_id)
    monkeypatch.setattr(config, 'VERIFY_SECURITY_KEY', True)

    with pytest.raises(StoreUnavailableError):
        identity_service.login(store, 'alice', 'k1')


def test_out_of_range_id_is_unknown(store):
    identity_service.login(store, 'alice', 'k1')
    with pytest.raises(NotFoundError):
        identity_service.get_name(store, 2**63)
    with pytest.raises(NotFoundError):
        identity_service.set_name(store, 2**63, 'bob')
    with pytest.raises(NotFoundError):
        identity_service.get_photo(store, 2**63)
    with pytest.raises(NotFoundError):
        identity_service.set_photo(store, 2**63, b'abc')


def test_set_empty_photo_on_unknown_user(store):
    with pytest.raises(NotFoundError):
        identity_service.set_photo(store, 7, b'')
    with pytest.raises(NotFoundError):
        identity_service.set_photo(store, 2**63, b'')
