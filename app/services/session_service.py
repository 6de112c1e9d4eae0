# /app/services/session_service.py
import time
import logging
from typing import Optional

import jwt
from fastapi import HTTPException, Request, Response, status

from app.core.config import settings

logger = logging.getLogger(__name__)

# 역할별 세션 쿠키 이름. super_admin 은 비밀번호 로그인 시 admin_session 을 사용합니다.
ROLE_COOKIES = {
    "student": "student_session",
    "staff": "staff_session",
    "super_admin": "admin_session",
}
OAUTH_COOKIE = "oauth_session"
SESSION_COOKIES = (*ROLE_COOKIES.values(), OAUTH_COOKIE)


def create_session_token(
    subject: str,
    role: str,
    email: str,
    staff_id: Optional[str] = None,
    student_id: Optional[str] = None,
    issued_at: Optional[int] = None,
) -> str:
    iat = int(time.time()) if issued_at is None else issued_at
    payload = {
        "sub": str(subject),
        "role": role,
        "email": email,
        "staff_id": staff_id,
        "student_id": student_id,
        "iat": iat,
        "exp": iat + settings.SESSION_EXPIRE_SECONDS,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: str) -> dict:
    """
    세션 토큰의 서명과 만료를 검증하고 claim 을 반환합니다.
    exp 와 별개로 iat + 세션 수명이 지난 토큰도 거부합니다.
    """
    invalid = HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session")
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise invalid
    except jwt.InvalidTokenError:
        raise invalid

    if payload["iat"] + settings.SESSION_EXPIRE_SECONDS < time.time():
        raise invalid
    if payload.get("role") not in ROLE_COOKIES:
        raise invalid
    return payload


def clear_session_cookies(response: Response, keep: Optional[str] = None) -> None:
    for name in SESSION_COOKIES:
        if name != keep:
            response.delete_cookie(name, path="/", domain=settings.COOKIE_DOMAIN)


def issue_session(
    response: Response,
    subject: str,
    role: str,
    email: str,
    staff_id: Optional[str] = None,
    student_id: Optional[str] = None,
    cookie_name: Optional[str] = None,
) -> str:
    """
    세션 토큰을 발급해 역할 쿠키에 저장하고, 다른 역할의 쿠키는 같은 응답에서 삭제합니다.
    """
    cookie_name = cookie_name or ROLE_COOKIES[role]
    token = create_session_token(subject, role, email, staff_id=staff_id, student_id=student_id)
    clear_session_cookies(response, keep=cookie_name)
    response.set_cookie(
        key=cookie_name,
        value=token,
        max_age=settings.SESSION_EXPIRE_SECONDS,
        path="/",
        domain=settings.COOKIE_DOMAIN,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )
    logger.info(f"Session issued: role={role} cookie={cookie_name}")
    return token


def find_session_cookie(cookies: dict, preferred: tuple[str, ...] = ()) -> Optional[str]:
    """
    선호 쿠키 → oauth_session → 나머지 세션 쿠키 순서로 먼저 발견되는 토큰을 반환합니다.
    """
    order = [*preferred, OAUTH_COOKIE, *SESSION_COOKIES]
    for name in order:
        token = cookies.get(name)
        if token:
            return token
    return None


def end_session(request: Request, response: Response) -> dict:
    """ 모든 세션 쿠키를 삭제합니다. 세션 쿠키가 하나도 없으면 401. """
    if not any(request.cookies.get(name) for name in SESSION_COOKIES):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No active session")
    clear_session_cookies(response)
    return {"message": "Logged out successfully"}
