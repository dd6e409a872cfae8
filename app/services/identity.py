import hmac
import logging

import config
from db.store import UserStore
from errors import AuthenticationError, NotFoundError, StoreUnavailableError, ValidationError

logger = logging.getLogger(__name__)


def _require_text(value, field: str) -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required')
    return value


def login(store: UserStore, username: str, security_key: str) -> int:
    """
    Resolve ``username`` to a user id, registering the user on first login.

    The supplied key is only compared with the stored one when
    ``VERIFY_SECURITY_KEY`` is enabled; otherwise a mismatch, or a stored key
    that can no longer be decrypted, is logged and the existing id is still
    returned.
    """
    _require_text(username, 'username')

    if store.user_exists(username):
        user_id = store.get_user_id(username)
        try:
            stored_key = store.get_user_key(user_id)
        except StoreUnavailableError:
            if config.VERIFY_SECURITY_KEY:
                raise
            logger.warning('Security key of user %d unreadable; login allowed (verification disabled)', user_id)
            return user_id
        if not hmac.compare_digest(stored_key.encode(), (security_key or '').encode()):
            if config.VERIFY_SECURITY_KEY:
                raise AuthenticationError('Incorrect username or security key')
            logger.warning('Security key mismatch for user %d; login allowed (verification disabled)', user_id)
        return user_id

    _require_text(security_key, 'securityKey')
    return store.create_user(
        username,
        config.PLACEHOLDER_LOCATION,
        config.PLACEHOLDER_LOCATION,
        security_key,
    )


def get_name(store: UserStore, user_id: int) -> str:
    return store.get_user_name(user_id)


def set_name(store: UserStore, user_id: int, new_name: str) -> None:
    _require_text(new_name, 'username')
    store.set_user_name(user_id, new_name)


def get_photo(store: UserStore, user_id: int) -> bytes:
    return store.get_user_photo(user_id)


def set_photo(store: UserStore, user_id: int, photo: bytes) -> None:
    # Stored as given; only emptiness is checked, not decodability. An
    # unknown id wins over an empty photo.
    if not photo:
        if not store.has_user(user_id):
            raise NotFoundError('User not found')
        raise ValidationError('photo is required')
    store.set_user_photo(user_id, bytes(photo))


def liveness(store: UserStore) -> None:
    store.ping()
