import uuid
from sqlalchemy import Column, String
from app.db.base import Base


class SuperAdmin(Base):
    __tablename__ = "super_admin"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    password = Column(String(255), nullable=True, comment="bcrypt 해시, OAuth 전용 계정은 NULL")
    user_id = Column(String(128), nullable=True)
