from pydantic import BaseModel
from datetime import datetime

class ProjectCreate(BaseModel):
    name: str | None = None
    description: str | None = None
    color: str | None = None


class ProjectUpdate(ProjectCreate):
    pass


class ProjectOut(BaseModel):
    id: str
    name: str
    description: str
    color: str
    user_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class MessageOut(BaseModel):
    message: str
