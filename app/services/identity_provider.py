# /app/services/identity_provider.py
import logging

from fastapi import HTTPException, status
from firebase_admin import auth, exceptions as firebase_exceptions

logger = logging.getLogger(__name__)


class FirebaseIdentityProvider:
    """ Firebase Authentication 래퍼. 테스트에서는 같은 인터페이스의 fake 로 교체합니다. """

    def verify_id_token(self, id_token: str) -> dict:
        try:
            return auth.verify_id_token(id_token)
        except auth.ExpiredIdTokenError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Firebase ID token has expired.",
                headers={"WWW-Authenticate": "Bearer error=\"invalid_token\", error_description=\"The token has expired\""},
            )
        except auth.InvalidIdTokenError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Invalid Firebase ID token: {e}",
                headers={"WWW-Authenticate": "Bearer error=\"invalid_token\", error_description=\"The token is invalid\""},
            )
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            logger.error(f"Unexpected error during Firebase token verification: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal server error occurred during token verification.",
            )

    def delete_user(self, uid: str) -> None:
        try:
            auth.delete_user(uid)
        except auth.UserNotFoundError:
            logger.info(f"Firebase user already removed: {uid}")
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            logger.error(f"Failed to delete Firebase user {uid}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to remove identity from the provider.",
            )


identity_provider = FirebaseIdentityProvider()


def get_identity_provider() -> FirebaseIdentityProvider:
    return identity_provider
