# /app/services/drive_service.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.application import Application
from app.models.drive import Drive
from app.models.student import Student
from app.schemas.drive import DriveCreate

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """ DB 의 tz 없는 UTC 컬럼과 비교하기 위한 현재 시각 """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_drives(db: Session, jobs: List[DriveCreate], mailer, staff_id: Optional[str] = None) -> dict:
    """
    채용 공고를 생성하고, 커밋 후 notification_emails 로 알림 메일을 보냅니다.
    """
    drives = []
    for job in jobs:
        drive = Drive(**job.model_dump(exclude={"notification_emails"}), staff_id=staff_id)
        db.add(drive)
        drives.append((drive, [str(email) for email in job.notification_emails]))
    db.commit()
    for drive, _ in drives:
        db.refresh(drive)
    logger.info(f"Created {len(drives)} drive(s) by {'staff ' + staff_id if staff_id else 'super admin'}")

    notified = 0
    for drive, recipients in drives:
        notified += mailer.send_job_notification(drive, recipients)

    return {
        "message": "Jobs created successfully",
        "jobs": [drive for drive, _ in drives],
        "notified": notified,
    }


def delete_drive(db: Session, drive_id: int, staff_id: Optional[str] = None) -> None:
    """ staff_id 가 주어지면 해당 교직원이 올린 공고만 삭제할 수 있습니다. """
    query = db.query(Drive).filter(Drive.id == drive_id)
    if staff_id is not None:
        query = query.filter(Drive.staff_id == staff_id)
    drive = query.first()
    if not drive:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    db.delete(drive)
    db.commit()


def get_drive_or_404(db: Session, drive_id: int) -> Drive:
    drive = db.query(Drive).filter(Drive.id == drive_id).first()
    if not drive:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return drive


def is_expired(drive: Drive, now: Optional[datetime] = None) -> bool:
    return drive.expiration is not None and drive.expiration < (now or utcnow())


def list_active_drives(db: Session) -> List[Drive]:
    now = utcnow()
    drives = (
        db.query(Drive)
        .filter((Drive.expiration.is_(None)) | (Drive.expiration >= now))
        .order_by(Drive.created_at.desc(), Drive.id.desc())
        .all()
    )
    if not drives:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No jobs found")
    return drives


def get_registered_students(db: Session, staff_id: Optional[str] = None) -> List[dict]:
    """
    지원 내역을 학생, 공고 정보와 함께 반환합니다. staff_id 가 있으면 담당 학생만 조회합니다.
    """
    query = (
        db.query(Application, Student, Drive)
        .join(Student, Application.student_id == Student.student_id)
        .join(Drive, Application.drive_id == Drive.id)
    )
    if staff_id is not None:
        query = query.filter(Student.staff_id == staff_id)

    return [
        {
            "application_id": application.id,
            "applied_at": application.applied_at,
            "student_id": student.student_id,
            "student_name": student.name,
            "student_email": student.email,
            "department": student.department,
            "drive_id": drive.id,
            "company_name": drive.company_name,
        }
        for application, student, drive in query.order_by(Application.applied_at.desc(), Application.id.desc()).all()
    ]


def get_jobs_with_students(db: Session) -> List[dict]:
    drives = db.query(Drive).order_by(Drive.id).all()
    result = []
    for drive in drives:
        applicants = [
            {
                "student_id": application.student.student_id,
                "name": application.student.name,
                "email": application.student.email,
                "department": application.student.department,
                "applied_at": application.applied_at,
            }
            for application in drive.applications
        ]
        item = {column.name: getattr(drive, column.name) for column in Drive.__table__.columns}
        item["applicants"] = applicants
        result.append(item)
    return result
