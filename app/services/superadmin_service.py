# /app/services/superadmin_service.py
import base64
import binascii
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.coordinator import Coordinator
from app.models.event import Event
from app.models.group_mail import GroupMail
from app.models.profile import Profile
from app.models.staff import Staff
from app.models.student import Student
from app.schemas.staff import StaffCreateRow
from app.schemas.student import AdminStudentUploadRow
from app.schemas.superadmin import CoordinatorCreate, EventCreate
from app.services.account_repository import staff_repository, student_repository
from app.services.role_resolver import RolePolicy

logger = logging.getLogger(__name__)


def get_overview(db: Session) -> dict:
    return {
        "staffs": db.query(Staff).order_by(Staff.email).all(),
        "students": db.query(Student).order_by(Student.email).all(),
    }


def create_staffs(db: Session, rows: List[StaffCreateRow], policy: RolePolicy) -> dict:
    return staff_repository.bulk_create(db, [row.model_dump() for row in rows], policy.is_institution_email)


def delete_staff(db: Session, staff_id: str) -> None:
    """
    교직원을 삭제합니다. 담당 학생과 그 지원 내역은 cascade 로 함께 삭제되고,
    연결된 Profile 은 외래키로 정리되지 않으므로 별도로 삭제합니다.
    """
    staff = staff_repository.get_or_404(db, staff_id)
    user_id = staff.user_id
    db.delete(staff)
    db.flush()

    deleted = 0
    if user_id:
        deleted = db.query(Profile).filter(Profile.id == user_id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Deleted staff {staff_id} and {deleted} linked profile(s)")


def bulk_upload_students(db: Session, rows: List[AdminStudentUploadRow], policy: RolePolicy) -> dict:
    """
    staff_email 로 담당 교직원을 찾아 학생을 일괄 등록합니다.
    존재하지 않는 교직원 이메일이 하나라도 있으면 전체 요청을 400 으로 거절합니다.
    """
    staff_emails = {row.staff_email.strip().lower() for row in rows}
    staff_ids = {
        email: staff_id
        for email, staff_id in db.query(Staff.email, Staff.staff_id).filter(Staff.email.in_(staff_emails)).all()
    }
    unknown = sorted(staff_emails - staff_ids.keys())
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid staff emails", "emails": unknown},
        )

    student_rows = []
    for row in rows:
        values = row.model_dump(exclude={"staff_email"})
        values["staff_id"] = staff_ids[row.staff_email.strip().lower()]
        student_rows.append(values)
    return student_repository.bulk_create(db, student_rows, policy.is_student_email)


def add_group_mails(db: Session, emails: List[str], policy: RolePolicy) -> dict:
    normalized = list(dict.fromkeys(email.strip().lower() for email in emails))
    invalid = [email for email in normalized if not policy.is_institution_email(email)]
    if invalid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": f"All emails must end with @{policy.institution_domain}", "emails": invalid},
        )

    existing = {email for (email,) in db.query(GroupMail.email).filter(GroupMail.email.in_(normalized)).all()}
    inserted = [email for email in normalized if email not in existing]
    db.add_all([GroupMail(email=email) for email in inserted])
    db.commit()
    return {"inserted": inserted, "skipped": [email for email in normalized if email in existing], "rejected": []}


def list_group_mails(db: Session) -> List[str]:
    return [email for (email,) in db.query(GroupMail.email).order_by(GroupMail.email).all()]


def decode_poster(poster: str) -> bytes:
    # data:image/png;base64,.... 형식도 허용
    if poster.startswith("data:") and "," in poster:
        poster = poster.split(",", 1)[1]
    try:
        return base64.b64decode(poster, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=422, detail="Invalid poster encoding")


def create_event(db: Session, event_in: EventCreate, storage) -> Event:
    url = None
    if event_in.poster:
        url = storage.upload_image(decode_poster(event_in.poster), event_in.poster_name or event_in.event_name, "events")
    event = Event(
        event_name=event_in.event_name,
        event_link=event_in.event_link,
        date=event_in.date,
        url=url,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def mark_placed_students(db: Session, emails: List[str], company_name: str) -> dict:
    updated, errors = [], []
    for email in dict.fromkeys(email.strip().lower() for email in emails):
        student = student_repository.get_by_email(db, email)
        if not student:
            errors.append({"email": email, "error": "Student not found"})
            continue
        student.placed_status = "yes"
        student.company_placed_in = company_name
        updated.append(email)
    db.commit()
    return {"updated": updated, "errors": errors}


def create_coordinators(db: Session, coordinators_in: List[CoordinatorCreate]) -> List[Coordinator]:
    coordinators = [Coordinator(**item.model_dump()) for item in coordinators_in]
    db.add_all(coordinators)
    db.commit()
    for coordinator in coordinators:
        db.refresh(coordinator)
    return coordinators
