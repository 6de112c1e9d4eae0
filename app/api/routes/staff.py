# /app/api/routes/staff.py
import logging

from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_staff
from app.dependencies.db import get_db
from app.schemas.auth import BulkCreateResponse, LoginRequest, MessageResponse, PasswordUpdateRequest
from app.schemas.drive import DriveCreateRequest, DriveCreateResponse
from app.schemas.staff import StaffDetailResponse
from app.schemas.student import BulkStudentCreateRequest, RegisteredStudentResponse
from app.services.account_repository import staff_repository
from app.services.drive_service import create_drives, delete_drive, get_registered_students
from app.services.mailer import Mailer, get_mailer
from app.services.role_resolver import RolePolicy, get_role_policy
from app.services.session_service import end_session, issue_session
from app.services.staff_service import create_students, delete_student, get_staff_details

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", summary="교직원 로그인", status_code=status.HTTP_302_FOUND)
def login_staff(
        req: LoginRequest = Body(...),
        db: Session = Depends(get_db)
):
    """
    이메일/비밀번호로 로그인하고 staff_session 쿠키와 함께 /staff 로 리다이렉트합니다.
    """
    staff = staff_repository.authenticate(db, req.email, req.password)
    response = RedirectResponse("/staff", status_code=status.HTTP_302_FOUND)
    issue_session(response, subject=staff.staff_id, role="staff", email=staff.email, staff_id=staff.staff_id)
    return response


@router.get("", response_model=StaffDetailResponse, summary="내 정보 및 담당 학생 조회")
def get_me(
        session: dict = Depends(get_current_staff),
        db: Session = Depends(get_db)
):
    return get_staff_details(db, session["staff_id"])


@router.post("/createstudents", response_model=BulkCreateResponse, summary="담당 학생 일괄 등록")
def create_students_api(
        req: BulkStudentCreateRequest = Body(...),
        session: dict = Depends(get_current_staff),
        db: Session = Depends(get_db),
        policy: RolePolicy = Depends(get_role_policy),
):
    """
    학번 이메일(7자리@기관 도메인)만 등록됩니다. 이미 등록된 이메일은 skipped 로 반환됩니다.
    """
    return create_students(db, session["staff_id"], req.students, policy)


@router.delete("/student/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="담당 학생 삭제")
def delete_student_api(
        student_id: str,
        session: dict = Depends(get_current_staff),
        db: Session = Depends(get_db)
):
    delete_student(db, session["staff_id"], student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/createjobs", response_model=DriveCreateResponse, status_code=status.HTTP_201_CREATED, summary="채용 공고 등록")
def create_jobs_api(
        req: DriveCreateRequest = Body(...),
        session: dict = Depends(get_current_staff),
        db: Session = Depends(get_db),
        mailer: Mailer = Depends(get_mailer),
):
    return create_drives(db, req.jobs, mailer, staff_id=session["staff_id"])


@router.delete("/job/{job_id}", status_code=status.HTTP_204_NO_CONTENT, summary="내가 올린 채용 공고 삭제")
def delete_job_api(
        job_id: int,
        session: dict = Depends(get_current_staff),
        db: Session = Depends(get_db)
):
    delete_drive(db, job_id, staff_id=session["staff_id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/registeredstudents", response_model=list[RegisteredStudentResponse], summary="담당 학생 지원 현황")
def get_registered_students_api(
        session: dict = Depends(get_current_staff),
        db: Session = Depends(get_db)
):
    return get_registered_students(db, staff_id=session["staff_id"])


@router.patch("/updatepassword", response_model=MessageResponse, summary="비밀번호 변경")
def update_password_api(
        req: PasswordUpdateRequest = Body(...),
        session: dict = Depends(get_current_staff),
        db: Session = Depends(get_db)
):
    staff_repository.change_password(db, session["staff_id"], req.old_password, req.new_password)
    return {"message": "Password updated successfully"}


@router.post("/logout", response_model=MessageResponse, summary="로그아웃")
def logout_staff(request: Request, response: Response):
    return end_session(request, response)
