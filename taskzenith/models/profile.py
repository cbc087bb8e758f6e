"""
Profile Model
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from taskzenith.database import Base
from taskzenith.models.timestamps import utcnow


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    avatar = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    memberships = relationship("ProjectMember", back_populates="profile", cascade="all, delete-orphan")
    assigned_tasks = relationship("Task", secondary="task_assignees", back_populates="assignees")
    comments = relationship("Comment", back_populates="author", cascade="all, delete-orphan")

    @property
    def display_email(self) -> str:
        return self.email or f"user-{self.id}@example.com"

    @property
    def display_avatar(self) -> str:
        return self.avatar or f"https://i.pravatar.cc/150?u={self.id}"
