import uuid
from sqlalchemy import Column, String, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Staff(Base):
    __tablename__ = "staff"

    staff_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=True, comment="bcrypt 해시, OAuth 전용 계정은 NULL")
    department = Column(String(100), nullable=True)
    user_id = Column(String(128), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    students = relationship(
        "Student",
        back_populates="staff",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    drives = relationship("Drive", back_populates="staff", passive_deletes=True)
