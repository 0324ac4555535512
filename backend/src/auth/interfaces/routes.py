from fastapi import APIRouter, Depends

from auth.domain.entities import Actor
from auth.interfaces.schemas import ActorResponse
from shared.dependencies import get_current_actor

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=ActorResponse)
async def me(actor: Actor = Depends(get_current_actor)):
    return actor
