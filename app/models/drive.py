from sqlalchemy import Column, Integer, String, Text, Float, Date, DateTime, JSON, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Drive(Base):
    __tablename__ = "drive"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    company_name = Column(String(255), nullable=False)
    job_description = Column(Text, nullable=True)
    drive_date = Column(Date, nullable=True)
    drive_link = Column(String(512), nullable=True)
    # 지원 마감 시각 (UTC)
    expiration = Column(DateTime, nullable=True)
    # 지원 가능 학과 목록, 비어 있으면 전체 학과
    department = Column(JSON, nullable=False, default=list)
    batch = Column(String(20), nullable=True)
    role = Column(String(255), nullable=True)
    lpa = Column(Float, nullable=True)
    staff_id = Column(String(36), ForeignKey("staff.staff_id", ondelete="SET NULL"), nullable=True, index=True)

    staff = relationship("Staff", back_populates="drives")
    applications = relationship(
        "Application",
        back_populates="drive",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
