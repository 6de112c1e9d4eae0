from sqlalchemy import Column, Integer, String
from app.db.base import Base


class GroupMail(Base):
    __tablename__ = "group_mails"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
