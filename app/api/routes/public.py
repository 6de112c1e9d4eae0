# /app/api/routes/public.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_session
from app.dependencies.db import get_db
from app.schemas.auth import SessionInfoResponse
from app.schemas.drive import DriveResponse
from app.schemas.superadmin import EventResponse, PlacedStudentResponse
from app.services.drive_service import list_active_drives
from app.services.public_service import list_events, list_placed_students

router = APIRouter()


@router.get("/", summary="API 상태 확인")
def index():
    return {"message": "Placement cell portal API"}


@router.get("/get-events", response_model=list[EventResponse], summary="행사 목록")
def get_events(db: Session = Depends(get_db)):
    return list_events(db)


@router.get("/get-jobs", response_model=list[DriveResponse], summary="모집 중인 채용 공고 목록")
def get_jobs(db: Session = Depends(get_db)):
    return list_active_drives(db)


@router.get("/get-placed-students", response_model=list[PlacedStudentResponse], summary="취업 학생 목록")
def get_placed_students(db: Session = Depends(get_db)):
    return list_placed_students(db)


@router.get("/check-session", response_model=SessionInfoResponse, summary="현재 세션 확인")
def check_session(session: dict = Depends(get_current_session)):
    """
    어떤 역할의 세션 쿠키든 검증 후 사용자 정보를 반환합니다.
    """
    return SessionInfoResponse(
        success=True,
        userId=session.get("staff_id") or session.get("student_id") or session["sub"],
        role=session["role"],
        email=session["email"],
    )
