# /app/services/student_service.py
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.application import Application
from app.models.drive import Drive
from app.models.student import Student
from app.schemas.student import ResumeFields
from app.services.account_repository import student_repository
from app.services.drive_service import get_drive_or_404, is_expired

logger = logging.getLogger(__name__)


def get_student(db: Session, student_id: str) -> Student:
    return student_repository.get_or_404(db, student_id)


def save_resume(db: Session, student_id: str, resume_in: ResumeFields, partial: bool) -> Student:
    """
    이력서 필드를 저장합니다. partial=True(PATCH)면 요청에 포함된 필드만 갱신합니다.
    """
    student = get_student(db, student_id)
    for field, value in resume_in.model_dump(exclude_unset=partial).items():
        setattr(student, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Register or roll number already in use")
    db.refresh(student)
    return student


def list_drives_for_student(db: Session, student_id: str) -> List[dict]:
    applied_ids = {
        drive_id for (drive_id,) in db.query(Application.drive_id).filter(Application.student_id == student_id).all()
    }
    drives = db.query(Drive).order_by(Drive.created_at.desc(), Drive.id.desc()).all()
    return [
        {**{column.name: getattr(drive, column.name) for column in Drive.__table__.columns}, "applied": drive.id in applied_ids}
        for drive in drives
    ]


def is_eligible(student: Student, drive: Drive) -> bool:
    if not drive.department:
        return True
    if not student.department:
        return False
    allowed = {department.strip().lower() for department in drive.department}
    return student.department.strip().lower() in allowed


def apply_for_drive(db: Session, student_id: str, drive_id: int) -> dict:
    student = get_student(db, student_id)
    drive = get_drive_or_404(db, drive_id)

    if is_expired(drive):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Application deadline has passed")
    if not is_eligible(student, drive):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Your department is not eligible for this drive")

    exists = db.query(Application).filter(
        Application.student_id == student_id,
        Application.drive_id == drive_id,
    ).first()
    if exists:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already applied for this drive")

    db.add(Application(student_id=student_id, drive_id=drive_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already applied for this drive")
    logger.info(f"Student {student_id} applied for drive {drive_id}")
    return {"message": "Application submitted successfully"}


def withdraw_application(db: Session, student_id: str, drive_id: int) -> dict:
    application = db.query(Application).filter(
        Application.student_id == student_id,
        Application.drive_id == drive_id,
    ).first()
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    db.delete(application)
    db.commit()
    return {"message": "Application withdrawn successfully"}


def has_applied(db: Session, student_id: str, drive_id: int) -> bool:
    return db.query(Application.id).filter(
        Application.student_id == student_id,
        Application.drive_id == drive_id,
    ).first() is not None


def update_profile_image(db: Session, student_id: str, data: bytes, filename: str, storage) -> str:
    """
    업로드된 이미지를 WEBP 로 변환해 S3 profile_image/ 폴더에 올리고 URL 을 저장합니다.
    """
    student = get_student(db, student_id)
    url = storage.upload_image(data, filename, "profile_image")
    student.profile_image_url = url
    db.commit()
    return url
