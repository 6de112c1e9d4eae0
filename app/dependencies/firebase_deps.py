# /app/dependencies/firebase_deps.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.services.identity_provider import FirebaseIdentityProvider, get_identity_provider

# Bearer 스키마 인스턴스 생성
bearer_scheme = HTTPBearer()


def get_verified_firebase_user(
    token: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    provider: FirebaseIdentityProvider = Depends(get_identity_provider),
) -> dict:
    """
    Authorization 헤더의 Firebase ID 토큰을 검증하고 디코딩된 정보(uid, email, name)를 반환합니다.
    """
    return provider.verify_id_token(token.credentials)
