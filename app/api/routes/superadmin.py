# /app/api/routes/superadmin.py
import logging

from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.dependencies.auth import get_current_super_admin
from app.dependencies.db import get_db
from app.schemas.auth import BulkCreateResponse, LoginRequest, MessageResponse
from app.schemas.drive import DriveCreateRequest, DriveCreateResponse
from app.schemas.staff import BulkStaffCreateRequest
from app.schemas.student import AdminStudentUploadRequest, RegisteredStudentResponse
from app.schemas.superadmin import (
    CoordinatorCreateRequest, CoordinatorResponse, DriveWithApplicants, EventCreate, EventResponse,
    GroupMailRequest, GroupMailResponse, PlacedStudentsRequest, PlacedStudentsResponse, SuperAdminOverviewResponse
)
from app.services.account_repository import super_admin_repository
from app.services.drive_service import create_drives, delete_drive, get_jobs_with_students, get_registered_students
from app.services.mailer import Mailer, get_mailer
from app.services.role_resolver import RolePolicy, get_role_policy
from app.services.session_service import end_session, issue_session
from app.services.storage import BucketStorage, get_storage
from app.services.superadmin_service import (
    add_group_mails, bulk_upload_students, create_coordinators, create_event, create_staffs, delete_staff,
    get_overview, list_group_mails, mark_placed_students
)

logger = logging.getLogger(__name__)

# 로그인/로그아웃을 제외한 모든 API 는 super_admin 세션 필요
router = APIRouter(dependencies=[Depends(get_current_super_admin)])
session_router = APIRouter()


@session_router.post("/login", summary="관리자 로그인", status_code=status.HTTP_302_FOUND)
def login_super_admin(
        req: LoginRequest = Body(...),
        db: Session = Depends(get_db)
):
    """
    관리자 계정으로 로그인하고 admin_session 쿠키와 함께 /superadmin 으로 리다이렉트합니다.
    """
    admin = super_admin_repository.authenticate(db, req.email, req.password)
    response = RedirectResponse("/superadmin", status_code=status.HTTP_302_FOUND)
    issue_session(response, subject=admin.id, role="super_admin", email=admin.email)
    return response


@router.get("", response_model=SuperAdminOverviewResponse, summary="전체 교직원/학생 조회 (관리자)")
def get_overview_api(
        session: dict = Depends(get_current_super_admin),
        db: Session = Depends(get_db)
):
    return {"email": session["email"], **get_overview(db)}


@router.post("/createstaffs", response_model=BulkCreateResponse, summary="교직원 일괄 등록 (관리자)")
def create_staffs_api(
        req: BulkStaffCreateRequest = Body(...),
        db: Session = Depends(get_db),
        policy: RolePolicy = Depends(get_role_policy),
):
    """
    기관 도메인 이메일만 등록됩니다. 이미 등록된 이메일은 skipped 로 반환됩니다.
    """
    return create_staffs(db, req.staffs, policy)


@router.delete("/staff/{staff_id}", status_code=status.HTTP_204_NO_CONTENT, summary="교직원 삭제 (관리자)")
def delete_staff_api(
        staff_id: str,
        db: Session = Depends(get_db)
):
    """
    담당 학생과 지원 내역도 함께 삭제되며, 연결된 OAuth Profile 도 삭제합니다.
    """
    delete_staff(db, staff_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/bulkuploadstudents", response_model=BulkCreateResponse, summary="학생 일괄 업로드 (관리자)")
def bulk_upload_students_api(
        req: AdminStudentUploadRequest = Body(...),
        db: Session = Depends(get_db),
        policy: RolePolicy = Depends(get_role_policy),
):
    return bulk_upload_students(db, req.students, policy)


@router.post("/createjobs", response_model=DriveCreateResponse, status_code=status.HTTP_201_CREATED, summary="채용 공고 등록 (관리자)")
def create_jobs_api(
        req: DriveCreateRequest = Body(...),
        db: Session = Depends(get_db),
        mailer: Mailer = Depends(get_mailer),
):
    return create_drives(db, req.jobs, mailer)


@router.delete("/job/{job_id}", status_code=status.HTTP_204_NO_CONTENT, summary="채용 공고 삭제 (관리자)")
def delete_job_api(
        job_id: int,
        db: Session = Depends(get_db)
):
    delete_drive(db, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/registeredstudents", response_model=list[RegisteredStudentResponse], summary="전체 지원 현황 (관리자)")
def get_registered_students_api(db: Session = Depends(get_db)):
    return get_registered_students(db)


@router.get("/jobs-with-students", response_model=list[DriveWithApplicants], summary="공고별 지원자 목록 (관리자)")
def get_jobs_with_students_api(db: Session = Depends(get_db)):
    return get_jobs_with_students(db)


@router.post("/groupmails", response_model=BulkCreateResponse, summary="단체 메일 주소 등록 (관리자)")
def add_group_mails_api(
        req: GroupMailRequest = Body(...),
        db: Session = Depends(get_db),
        policy: RolePolicy = Depends(get_role_policy),
):
    return add_group_mails(db, req.emails, policy)


@router.get("/groupmails", response_model=GroupMailResponse, summary="단체 메일 주소 조회 (관리자)")
def get_group_mails_api(db: Session = Depends(get_db)):
    return {"emails": list_group_mails(db)}


@router.post("/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED, summary="행사 등록 (관리자)")
def create_event_api(
        req: EventCreate = Body(...),
        db: Session = Depends(get_db),
        storage: BucketStorage = Depends(get_storage),
):
    """
    poster(base64)가 있으면 WEBP 로 변환해 S3 events/ 폴더에 업로드합니다.
    """
    return create_event(db, req, storage)


@router.post("/placedstudents", response_model=PlacedStudentsResponse, summary="취업 학생 등록 (관리자)")
def mark_placed_students_api(
        req: PlacedStudentsRequest = Body(...),
        db: Session = Depends(get_db)
):
    return mark_placed_students(db, req.emails, req.company_name)


@router.post("/createcoordinators", response_model=list[CoordinatorResponse], status_code=status.HTTP_201_CREATED, summary="코디네이터 등록 (관리자)")
def create_coordinators_api(
        req: CoordinatorCreateRequest = Body(...),
        db: Session = Depends(get_db)
):
    return create_coordinators(db, req.coordinators)


@session_router.post("/logout", response_model=MessageResponse, summary="로그아웃")
def logout_super_admin(request: Request, response: Response):
    return end_session(request, response)
