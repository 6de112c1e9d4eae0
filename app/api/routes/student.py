# /app/api/routes/student.py
import logging

from fastapi import APIRouter, Body, Depends, File, Request, Response, UploadFile, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_student
from app.dependencies.db import get_db
from app.schemas.auth import LoginRequest, MessageResponse, PasswordUpdateRequest
from app.schemas.drive import ApplicationRequest, ApplicationStatusResponse, StudentDriveResponse
from app.schemas.student import ProfileImageResponse, ResumeFields, StudentResumeResponse, StudentSummary
from app.services.account_repository import student_repository
from app.services.session_service import end_session, issue_session
from app.services.storage import BucketStorage, get_storage
from app.services.student_service import (
    apply_for_drive, get_student, has_applied, list_drives_for_student, save_resume,
    update_profile_image, withdraw_application
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", summary="학생 로그인", status_code=status.HTTP_302_FOUND)
def login_student(
        req: LoginRequest = Body(...),
        db: Session = Depends(get_db)
):
    """
    이메일/비밀번호로 로그인하고 student_session 쿠키와 함께 /student 로 리다이렉트합니다.
    """
    student = student_repository.authenticate(db, req.email, req.password)
    response = RedirectResponse("/student", status_code=status.HTTP_302_FOUND)
    issue_session(
        response,
        subject=student.student_id,
        role="student",
        email=student.email,
        student_id=student.student_id,
    )
    return response


@router.get("", response_model=StudentSummary, summary="내 정보 조회")
def get_me(
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    return get_student(db, session["student_id"])


@router.get("/resume", response_model=StudentResumeResponse, summary="이력서 조회")
def get_resume(
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    return get_student(db, session["student_id"])


@router.post("/resume", response_model=StudentResumeResponse, summary="이력서 작성 (전체 덮어쓰기)")
def create_resume(
        req: ResumeFields = Body(...),
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    return save_resume(db, session["student_id"], req, partial=False)


@router.patch("/resume", response_model=StudentResumeResponse, summary="이력서 일부 수정")
def update_resume(
        req: ResumeFields = Body(...),
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    return save_resume(db, session["student_id"], req, partial=True)


@router.patch("/updatepassword", response_model=MessageResponse, summary="비밀번호 변경")
def update_password_api(
        req: PasswordUpdateRequest = Body(...),
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    student_repository.change_password(db, session["student_id"], req.old_password, req.new_password)
    return {"message": "Password updated successfully"}


@router.get("/drives", response_model=list[StudentDriveResponse], summary="채용 공고 목록 (지원 여부 포함)")
def get_drives(
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    return list_drives_for_student(db, session["student_id"])


@router.post("/apply", response_model=MessageResponse, status_code=status.HTTP_201_CREATED, summary="채용 공고 지원")
def apply(
        req: ApplicationRequest = Body(...),
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    """
    마감이 지났거나 학과가 대상이 아니면 403, 이미 지원했으면 409.
    """
    return apply_for_drive(db, session["student_id"], req.id)


@router.delete("/apply", response_model=MessageResponse, summary="지원 취소")
def withdraw(
        req: ApplicationRequest = Body(...),
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    return withdraw_application(db, session["student_id"], req.id)


@router.get("/apply/{drive_id}", response_model=ApplicationStatusResponse, summary="지원 여부 확인")
def get_application_status(
        drive_id: int,
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db)
):
    return {"applied": has_applied(db, session["student_id"], drive_id)}


@router.post("/profile/image", response_model=ProfileImageResponse, summary="프로필 이미지 업로드")
def upload_profile_image(
        file: UploadFile = File(...),
        session: dict = Depends(get_current_student),
        db: Session = Depends(get_db),
        storage: BucketStorage = Depends(get_storage),
):
    """
    업로드한 이미지를 WEBP 로 변환해 S3 에 저장하고 학생 프로필 URL 을 갱신합니다.
    """
    url = update_profile_image(db, session["student_id"], file.file.read(), file.filename, storage)
    return ProfileImageResponse(message="Profile image updated successfully", url=url)


@router.post("/logout", response_model=MessageResponse, summary="로그아웃")
def logout_student(request: Request, response: Response):
    return end_session(request, response)
