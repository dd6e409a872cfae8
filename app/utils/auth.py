from typing import Annotated

from fastapi import Header, HTTPException, status

BEARER_PREFIX = 'bearer '

def parse_bearer_id(authorization: str | None) -> int | None:
    """Return the user id carried by an ``Authorization: Bearer <id>`` header."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None

    token = authorization[len(BEARER_PREFIX):].strip()
    if not (token.isascii() and token.isdigit()):
        return None
    return int(token)

def get_token_user_id_http(authorization: Annotated[str | None, Header()] = None) -> int:
    res = parse_bearer_id(authorization)
    if res is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Invalid token',
            headers={'WWW-Authenticate': 'Bearer'},
        )
    return res

def require_owner(user_id: int, token_user_id: int) -> None:
    if user_id != token_user_id:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail='Not allowed to act on another user')
