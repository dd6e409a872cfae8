from fastapi import Depends
from fastapi.routing import APIRouter

import services.identity as identity_service
from db.session import get_store
from db.store import UserStore

router = APIRouter()

@router.get('/liveness')
async def liveness(store: UserStore = Depends(get_store)) -> dict[str, str]:
    # StoreUnavailableError is turned into a 503 by the app-level handler.
    identity_service.liveness(store)
    return {'status': 'ok'}
