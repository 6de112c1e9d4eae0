from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("student_id", "drive_id", name="uq_application_student_drive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(String(36), ForeignKey("students.student_id", ondelete="CASCADE"), nullable=False)
    drive_id = Column(Integer, ForeignKey("drive.id", ondelete="CASCADE"), nullable=False)
    applied_at = Column(TIMESTAMP, server_default=func.now())

    student = relationship("Student", back_populates="applications")
    drive = relationship("Drive", back_populates="applications")
