# /app/services/storage.py
import io
import os
import time
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError
from fastapi import HTTPException, status
from PIL import Image, UnidentifiedImageError

from app.core.config import settings

logger = logging.getLogger(__name__)


class BucketStorage:
    """
    이미지를 WEBP 로 변환해 S3 에 업로드하고 공개 URL 을 반환합니다.
    boto3 클라이언트는 첫 업로드 시점에 생성합니다.
    """

    def __init__(self, bucket: str | None, region: str, access_key: str, secret_key: str):
        self.bucket = bucket
        self.region = region
        self._access_key = access_key
        self._secret_key = secret_key
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                aws_access_key_id=self._access_key,
                aws_secret_access_key=self._secret_key,
                region_name=self.region,
            )
        return self._client

    @staticmethod
    def to_webp(data: bytes, quality: int = 80) -> bytes:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
            raise HTTPException(status_code=422, detail="Invalid image file")
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
        output = io.BytesIO()
        image.save(output, format="WEBP", quality=quality)
        return output.getvalue()

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload_image(self, data: bytes, filename: str, folder: str) -> str:
        """
        이미지를 {folder}/{epoch-ms}_{파일명}.webp 키로 업로드합니다.
        """
        if not self.bucket:
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="S3 bucket is not configured")

        webp = self.to_webp(data)
        basename = os.path.splitext(os.path.basename(filename or "image"))[0] or "image"
        key = f"{folder}/{int(time.time() * 1000)}_{basename}.webp"
        try:
            self.client.upload_fileobj(
                io.BytesIO(webp),
                self.bucket,
                key,
                ExtraArgs={"ContentType": "image/webp"},
            )
        except NoCredentialsError:
            logger.error("S3 credentials are missing")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="S3 credentials are missing")
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload failed for {key}: {e}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Image upload failed")
        return self.public_url(key)


storage = BucketStorage(
    bucket=settings.AWS_S3_BUCKET_NAME,
    region=settings.AWS_REGION,
    access_key=settings.AWS_ACCESS_KEY,
    secret_key=settings.AWS_SECRET_KEY,
)


def get_storage() -> BucketStorage:
    return storage
