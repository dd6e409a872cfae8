from db.types import EncryptedText
from sqlalchemy import LargeBinary
from sqlmodel import SQLModel, Field, Column

class User(SQLModel, table=True):
    __tablename__ = 'users'
    # AUTOINCREMENT keeps SQLite from handing out an id twice.
    __table_args__ = {'sqlite_autoincrement': True}

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(index=True)
    country: str
    city: str
    security_key: str = Field(sa_column=Column(EncryptedText(), nullable=False))
    photo: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
