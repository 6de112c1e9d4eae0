from sqlalchemy import Column, String, Enum
from app.db.base import Base

USER_ROLES = ("super_admin", "staff", "student")


class Profile(Base):
    __tablename__ = "profiles"

    # Firebase uid
    id = Column(String(128), primary_key=True, index=True)
    user_role = Column(Enum(*USER_ROLES, name="user_role"), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
