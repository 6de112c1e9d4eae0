# /app/api/routes/auth.py
import logging
from typing import Literal, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.dependencies.db import get_db
from app.dependencies.firebase_deps import get_verified_firebase_user
from app.schemas.auth import MessageResponse, OAuthLoginResponse
from app.services.identity_provider import FirebaseIdentityProvider, get_identity_provider
from app.services.role_resolver import RolePolicy, get_role_policy, handle_oauth_login
from app.services.session_service import OAUTH_COOKIE, end_session, issue_session

logger = logging.getLogger(__name__)

router = APIRouter()

RoleName = Literal["super_admin", "staff", "student"]


def oauth_signin_redirect(intended_role: Optional[str], return_url: Optional[str]) -> RedirectResponse:
    params = {key: value for key, value in (("intendedRole", intended_role), ("returnUrl", return_url)) if value}
    target = settings.OAUTH_SIGNIN_URL
    if params:
        target = f"{target}?{urlencode(params)}"
    return RedirectResponse(target, status_code=status.HTTP_302_FOUND)


@router.get("/users/oauth", summary="Google OAuth 로그인 시작")
def start_oauth(
        intendedRole: Optional[RoleName] = Query(None),
        returnUrl: Optional[str] = Query(None),
):
    """
    프론트엔드 OAuth 로그인 페이지로 리다이렉트합니다. intendedRole / returnUrl 은 그대로 전달됩니다.
    """
    return oauth_signin_redirect(intendedRole, returnUrl)


@router.get("/oauth/student", summary="학생 OAuth 로그인 시작")
def start_student_oauth(returnUrl: Optional[str] = Query(None)):
    return oauth_signin_redirect("student", returnUrl)


@router.get("/oauth/staff", summary="교직원 OAuth 로그인 시작")
def start_staff_oauth(returnUrl: Optional[str] = Query(None)):
    return oauth_signin_redirect("staff", returnUrl)


@router.get("/users/oauth/success", response_model=OAuthLoginResponse, summary="OAuth 로그인 완료 (세션 발급)")
def oauth_success(
        response: Response,
        intendedRole: Optional[RoleName] = Query(None),
        returnUrl: Optional[str] = Query(None),
        decoded_token: dict = Depends(get_verified_firebase_user),
        db: Session = Depends(get_db),
        policy: RolePolicy = Depends(get_role_policy),
        provider: FirebaseIdentityProvider = Depends(get_identity_provider),
):
    """
    Firebase ID 토큰으로 사용자를 확인하고 이메일로 역할을 결정한 뒤 세션 쿠키를 발급합니다.
    실패 응답에는 프론트엔드가 이동할 redirect 가 포함됩니다.
    """
    try:
        user = handle_oauth_login(db, decoded_token, policy, provider, intended_role=intendedRole)
    except HTTPException as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={"error": e.detail, "redirect": returnUrl or "/login"},
        )

    role = user["role"]
    issue_session(
        response,
        subject=user["uid"],
        role=role,
        email=user["email"],
        staff_id=user["staff_id"],
        student_id=user["student_id"],
        cookie_name=OAUTH_COOKIE if role == "super_admin" else None,
    )
    return OAuthLoginResponse(
        success=True,
        role=role,
        userId=user["staff_id"] or user["student_id"] or user["uid"],
        email=user["email"],
        full_name=user["full_name"],
        message="OAuth login successful",
        redirect=returnUrl or f"/dashboard/{role}",
    )


@router.post("/logout", response_model=MessageResponse, summary="로그아웃 (모든 세션 쿠키 삭제)")
def logout(request: Request, response: Response):
    return end_session(request, response)
