"""
Project Member Model
"""
import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from taskzenith.database import Base
from taskzenith.models.timestamps import utcnow


class ProjectRole(str, enum.Enum):
    OWNER = "OWNER"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"


class ProjectMember(Base):
    __tablename__ = "project_members"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    role = Column(SQLEnum(ProjectRole, name="project_role"), default=ProjectRole.MEMBER, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="members")
    profile = relationship("Profile", back_populates="memberships")

    __table_args__ = (
        UniqueConstraint("project_id", "profile_id", name="unique_project_member"),
    )
