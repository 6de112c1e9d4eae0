# /app/services/public_service.py
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.event import Event
from app.models.student import Student


def list_events(db: Session) -> List[Event]:
    events = db.query(Event).order_by(Event.id.desc()).all()
    if not events:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No events found")
    return events


def list_placed_students(db: Session) -> List[dict]:
    students = db.query(Student).filter(Student.placed_status == "yes").order_by(Student.name).all()
    if not students:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No placed students found")
    return [
        {
            "name": student.name,
            "department": student.department,
            "batch": student.batch,
            "company_placed_in": student.company_placed_in,
            "url": student.profile_image_url,
        }
        for student in students
    ]
