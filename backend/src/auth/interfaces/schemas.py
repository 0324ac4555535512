from pydantic import BaseModel


class ActorResponse(BaseModel):
    id: str
    name: str | None = None
