import os
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip().lower() for item in value.split(",") if item.strip()]


class Settings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./placement.db")

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-secret")
    JWT_ALGORITHM = "HS256"
    SESSION_EXPIRE_SECONDS = 3600
    COOKIE_SECURE = os.getenv("COOKIE_SECURE", "false").lower() == "true"
    COOKIE_DOMAIN = os.getenv("COOKIE_DOMAIN") or None

    # 기관 도메인 및 역할 허용 목록
    INSTITUTION_DOMAIN = os.getenv("INSTITUTION_DOMAIN", "saec.ac.in")
    SUPER_ADMIN_EMAILS = _split_csv(os.getenv("SUPER_ADMIN_EMAILS"))
    STAFF_EMAILS = _split_csv(os.getenv("STAFF_EMAILS"))

    FIREBASE_SERVICE_ACCOUNT_KEY_PATH = os.getenv("FIREBASE_SERVICE_ACCOUNT_KEY_PATH")
    OAUTH_SIGNIN_URL = os.getenv("OAUTH_SIGNIN_URL", "http://localhost:3000/oauth")

    AWS_ACCESS_KEY = os.getenv("AWS_ACCESS_KEY", "accesskey")
    AWS_SECRET_KEY = os.getenv("AWS_SECRET_KEY", "supersecret")
    AWS_REGION = os.getenv("AWS_REGION", "ap-south-1")
    AWS_S3_BUCKET_NAME = os.getenv("AWS_S3_BUCKET_NAME")

    EMAIL_USER = os.getenv("EMAIL_USER")
    EMAIL_PASS = os.getenv("EMAIL_PASS")
    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", 465))

    BACKEND_CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("BACKEND_CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]


settings = Settings()
