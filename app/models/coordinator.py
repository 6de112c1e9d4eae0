from sqlalchemy import Column, Integer, String
from app.db.base import Base


class Coordinator(Base):
    __tablename__ = "coordinators"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    dept = Column(String(100), nullable=True)
    phone_number = Column(String(20), nullable=True)
