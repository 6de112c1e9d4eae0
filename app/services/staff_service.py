# /app/services/staff_service.py
from typing import List

from sqlalchemy.orm import Session

from app.models.student import Student
from app.schemas.student import StudentCreateRow
from app.services.account_repository import staff_repository, student_repository
from app.services.role_resolver import RolePolicy


def get_staff_details(db: Session, staff_id: str) -> dict:
    staff = staff_repository.get_or_404(db, staff_id)
    students = db.query(Student).filter(Student.staff_id == staff_id).order_by(Student.email).all()
    return {"staff": staff, "students": students}


def create_students(db: Session, staff_id: str, rows: List[StudentCreateRow], policy: RolePolicy) -> dict:
    """ 담당 교직원 아래에 학생을 일괄 등록합니다. 학번 형식(7자리) 이메일만 허용합니다. """
    return student_repository.bulk_create(
        db,
        [row.model_dump() for row in rows],
        policy.is_student_email,
        staff_id=staff_id,
    )


def delete_student(db: Session, staff_id: str, student_id: str) -> None:
    # 다른 교직원의 학생은 404 로 처리
    student_repository.delete(db, student_id, staff_id=staff_id)
