from fastapi import Request

from config import DATABASE_ECHO, DATABASE_URL
from db.store import UserStore

def open_store() -> UserStore:
    store = UserStore.from_url(DATABASE_URL, echo=DATABASE_ECHO)
    store.init_schema()
    return store

def get_store(request: Request) -> UserStore:
    return request.app.state.store
