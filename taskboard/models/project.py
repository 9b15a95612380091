from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey
from taskboard.core.database import Base
from taskboard.models.user import new_id, utcnow

DEFAULT_COLOR = "#3B82F6"


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    color = Column(String, nullable=False, default=DEFAULT_COLOR)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False)
