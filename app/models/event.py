from sqlalchemy import Column, Integer, String
from app.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    event_name = Column(String(255), nullable=False)
    event_link = Column(String(512), nullable=True)
    date = Column(String(50), nullable=True)
    url = Column(String(512), nullable=True, comment="포스터 이미지 URL")
