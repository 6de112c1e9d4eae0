# /app/dependencies/auth.py
from fastapi import HTTPException, Request, status

from app.services.session_service import ROLE_COOKIES, decode_session_token, find_session_cookie


def require_session(*roles: str):
    """
    역할 쿠키(없으면 oauth_session)를 읽어 세션을 검증하는 dependency 를 만듭니다.
    세션 없음/무효 → 401, 허용되지 않은 역할 → 403.
    """
    preferred = tuple(ROLE_COOKIES[role] for role in roles)

    def verify_session(request: Request) -> dict:
        token = find_session_cookie(request.cookies, preferred)
        if not token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized: No session found")
        claims = decode_session_token(token)
        if roles and claims["role"] not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized: Insufficient role")
        return claims

    return verify_session


get_current_session = require_session()
get_current_student = require_session("student")
get_current_staff = require_session("staff")
get_current_super_admin = require_session("super_admin")
