import uuid
from sqlalchemy import Column, String, Integer, Float, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Student(Base):
    __tablename__ = "students"

    student_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    staff_id = Column(String(36), ForeignKey("staff.staff_id", ondelete="CASCADE"), nullable=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    phone_number = Column(String(20), nullable=True)
    skill_set = Column(String(1000), nullable=True)
    languages_known = Column(String(500), nullable=True)
    tenth_mark = Column(Float, nullable=True)
    twelfth_mark = Column(Float, nullable=True)
    cgpa = Column(Float, nullable=True)
    batch = Column(String(20), nullable=True, comment="졸업 연도 예: '2025'")
    linkedin_url = Column(String(512), nullable=True)
    github_url = Column(String(512), nullable=True)
    reg_no = Column(String(50), unique=True, nullable=True)
    roll_no = Column(String(50), unique=True, nullable=True)
    department = Column(String(100), nullable=True)
    no_of_arrears = Column(Integer, nullable=True, default=0)
    placed_status = Column(String(3), nullable=False, default="no")
    company_placed_in = Column(String(255), nullable=True)
    profile_image_url = Column(String(512), nullable=True, comment="S3에 저장된 프로필 이미지 URL")
    user_id = Column(String(128), nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    staff = relationship("Staff", back_populates="students")
    applications = relationship(
        "Application",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
