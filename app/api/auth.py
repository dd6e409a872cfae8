from fastapi import Depends, HTTPException, status
from fastapi.routing import APIRouter
from pydantic import BaseModel, ConfigDict, Field

import errors
import services.identity as identity_service
from db.session import get_store
from db.store import UserStore

router = APIRouter()

class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    security_key: str = Field(default='', alias='securityKey')


class LoginResponse(BaseModel):
    id: int


class FailedAuthResponse(BaseModel):
    status_code: int = status.HTTP_401_UNAUTHORIZED
    detail: str = 'Incorrect username or security key'


@router.post(
    '/session',
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_401_UNAUTHORIZED: {
            'model': FailedAuthResponse,
            'description': 'Incorrect username or security key',
        },
    },
)
async def login(data: LoginRequest, store: UserStore = Depends(get_store)) -> LoginResponse:
    try:
        user_id = identity_service.login(store, data.username, data.security_key)
    except errors.ValidationError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e))
    except errors.AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Incorrect username or security key',
            headers={'WWW-Authenticate': 'Bearer'},
        )

    return LoginResponse(id=user_id)
