import logging
import os
import firebase_admin
from firebase_admin import credentials

from app.core.config import settings

logger = logging.getLogger(__name__)


def initialize_firebase() -> bool:
    """
    서비스 계정 키 경로로 Firebase Admin SDK를 초기화합니다.
    키가 설정되지 않은 환경(로컬/테스트)에서는 초기화를 건너뛰고 False를 반환합니다.
    """
    key_path = settings.FIREBASE_SERVICE_ACCOUNT_KEY_PATH
    if not key_path:
        logger.warning("FIREBASE_SERVICE_ACCOUNT_KEY_PATH is not set; OAuth login is disabled.")
        return False
    if not os.path.exists(key_path):
        raise FileNotFoundError(f"Firebase service account key not found: {key_path}")

    if not firebase_admin._apps:
        cred = credentials.Certificate(key_path)
        firebase_admin.initialize_app(cred)
        logger.info("Firebase Admin SDK initialized.")
    else:
        logger.info("Firebase Admin SDK already initialized.")
    return True
