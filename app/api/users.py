from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.routing import APIRouter
from pydantic import BaseModel

import errors
import services.identity as identity_service
from db.session import get_store
from db.store import UserStore
from utils.auth import get_token_user_id_http, require_owner

router = APIRouter(prefix='/users')

PHOTO_MEDIA_TYPE = 'image/jpeg'

class UserName(BaseModel):
    username: str


def owner_id(user_id: int, token_user_id: Annotated[int, Depends(get_token_user_id_http)]) -> int:
    require_owner(user_id, token_user_id)
    return user_id


@router.get('/{user_id}/name')
async def get_user_name(
    owner: Annotated[int, Depends(owner_id)],
    store: UserStore = Depends(get_store),
) -> UserName:
    try:
        username = identity_service.get_name(store, owner)
    except errors.NotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, 'User not found')
    return UserName(username=username)


@router.put('/{user_id}/name', status_code=status.HTTP_204_NO_CONTENT)
async def set_user_name(
    data: UserName,
    owner: Annotated[int, Depends(owner_id)],
    store: UserStore = Depends(get_store),
) -> None:
    try:
        identity_service.set_name(store, owner, data.username)
    except errors.ValidationError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e))
    except errors.NotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, 'User not found')


@router.get(
    '/{user_id}/photo',
    response_class=Response,
    responses={status.HTTP_200_OK: {'content': {PHOTO_MEDIA_TYPE: {}}}},
)
async def get_user_photo(
    owner: Annotated[int, Depends(owner_id)],
    store: UserStore = Depends(get_store),
) -> Response:
    try:
        photo = identity_service.get_photo(store, owner)
    except errors.NotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, 'User not found')
    return Response(content=photo, media_type=PHOTO_MEDIA_TYPE)


@router.put('/{user_id}/photo', status_code=status.HTTP_204_NO_CONTENT)
async def set_user_photo(
    request: Request,
    owner: Annotated[int, Depends(owner_id)],
    store: UserStore = Depends(get_store),
) -> None:
    photo = await request.body()
    try:
        identity_service.set_photo(store, owner, photo)
    except errors.ValidationError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e))
    except errors.NotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, 'User not found')
