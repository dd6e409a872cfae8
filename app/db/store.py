import logging
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine, select

import codec
from config import DEFAULT_PHOTO_HEIGHT, DEFAULT_PHOTO_QUALITY, DEFAULT_PHOTO_WIDTH
from errors import CreateError, NotFoundError, StoreUnavailableError, UpdateError
from schemas import User
from utils.crypto import DecryptionError

logger = logging.getLogger(__name__)

# Range of an SQLite INTEGER; ids outside it cannot belong to any row.
MIN_ID = -2**63
MAX_ID = 2**63 - 1


def default_photo() -> bytes:
    image = codec.generate_default_image(DEFAULT_PHOTO_WIDTH, DEFAULT_PHOTO_HEIGHT)
    return codec.encode(image, DEFAULT_PHOTO_QUALITY)


class UserStore:
    """
    Persistent user records.

    This is the only component that talks to the database. It is built once
    at startup and handed to the service layer. Every method opens its own
    session, so a store can be shared between request threads; concurrent
    writes rely on the database's own locking. Database failures are logged
    and re-raised as :class:`StoreUnavailableError`, :class:`CreateError` or
    :class:`UpdateError`, never retried.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> 'UserStore':
        connect_args = {}
        db_url = make_url(url)
        if db_url.get_backend_name() == 'sqlite':
            connect_args['check_same_thread'] = False
            if db_url.database and db_url.database != ':memory:':
                Path(db_url.database).parent.mkdir(parents=True, exist_ok=True)

        engine = create_engine(url, echo=echo, connect_args=connect_args)
        return cls(engine)

    def init_schema(self) -> None:
        try:
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.exception('Could not create tables')
            raise StoreUnavailableError('Could not create tables') from e

    def close(self) -> None:
        self.engine.dispose()

    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text('SELECT 1'))
        except SQLAlchemyError as e:
            logger.exception('Database ping failed')
            raise StoreUnavailableError('Database unreachable') from e

    def _require_id(self, user_id: int) -> None:
        if not MIN_ID <= user_id <= MAX_ID:
            raise NotFoundError('User not found')

    def _read(self, statement):
        try:
            with Session(self.engine) as session:
                return session.exec(statement).first()
        except SQLAlchemyError as e:
            logger.exception('Read failed')
            raise StoreUnavailableError('Read failed') from e

    def user_exists(self, username: str) -> bool:
        return self._read(select(User.id).where(User.username == username).limit(1)) is not None

    def create_user(self, username: str, country: str, city: str, security_key: str) -> int:
        """Insert a user with the placeholder photo and return the new id."""
        photo = default_photo()
        user = User(
            username=username,
            country=country,
            city=city,
            security_key=security_key,
            photo=photo,
        )
        try:
            with Session(self.engine) as session:
                session.add(user)
                session.commit()
                session.refresh(user)
                user_id = user.id
        except SQLAlchemyError as e:
            logger.exception('Could not create user %r', username)
            raise CreateError('Could not create user') from e

        logger.info('Created user %d (%s)', user_id, username)
        return user_id

    def get_user_name(self, user_id: int) -> str:
        self._require_id(user_id)
        username = self._read(select(User.username).where(User.id == user_id))
        if username is None:
            raise NotFoundError('User not found')
        return username

    def get_user_key(self, user_id: int) -> str:
        self._require_id(user_id)
        try:
            key = self._read(select(User.security_key).where(User.id == user_id))
        except DecryptionError as e:
            logger.exception('Stored security key of user %d cannot be decrypted', user_id)
            raise StoreUnavailableError('Security key unreadable') from e
        if key is None:
            raise NotFoundError('User not found')
        return key

    def has_user(self, user_id: int) -> bool:
        if not MIN_ID <= user_id <= MAX_ID:
            return False
        return self._read(select(User.id).where(User.id == user_id)) is not None

    def get_user_id(self, username: str) -> int:
        user_id = self._read(
            select(User.id).where(User.username == username).order_by(User.id).limit(1)
        )
        if user_id is None:
            raise NotFoundError('User not found')
        return user_id

    def get_user_photo(self, user_id: int) -> bytes:
        self._require_id(user_id)
        photo = self._read(select(User.photo).where(User.id == user_id))
        if photo is None:
            raise NotFoundError('User not found')
        return photo

    def _update(self, user_id: int, **values) -> None:
        self._require_id(user_id)
        try:
            with Session(self.engine) as session:
                user = session.get(User, user_id)
                if user is None:
                    raise NotFoundError('User not found')
                for field, value in values.items():
                    setattr(user, field, value)
                session.add(user)
                session.commit()
        except SQLAlchemyError as e:
            logger.exception('Could not update user %d', user_id)
            raise UpdateError('Could not update user') from e

    def set_user_name(self, user_id: int, username: str) -> None:
        self._update(user_id, username=username)
        logger.info('Renamed user %d to %s', user_id, username)

    def set_user_photo(self, user_id: int, photo: bytes) -> None:
        self._update(user_id, photo=photo)
        logger.info('Replaced photo of user %d (%d bytes)', user_id, len(photo))
