# /app/services/mailer.py
import html
import smtplib
import logging
from email.mime.text import MIMEText

from fastapi import HTTPException, status

from app.core.config import settings

logger = logging.getLogger(__name__)


class Mailer:
    def __init__(self, host: str, port: int, user: str | None, password: str | None):
        self.host = host
        self.port = port
        self.user = user
        self.password = password

    def build_job_notification(self, drive, recipient: str) -> MIMEText:
        body = (
            "<h2>New Job Opportunity</h2>"
            f"<p>{html.escape(drive.job_description or '')}</p>"
            "<p>Please review the listing in the placement portal and take necessary action.</p>"
        )
        message = MIMEText(body, "html")
        message["Subject"] = f"New Job Posting: {drive.company_name}"
        message["From"] = self.user or ""
        message["To"] = recipient
        return message

    def send_job_notification(self, drive, recipients: list[str]) -> int:
        """
        채용 공고 알림 메일을 수신자별로 한 통씩 보냅니다. 보낸 메일 수를 반환합니다.
        """
        if not recipients:
            return 0
        if not self.user or not self.password:
            logger.warning("EMAIL_USER / EMAIL_PASS not configured; skipping job notification")
            return 0

        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=15) as server:
                server.login(self.user, self.password)
                for recipient in recipients:
                    server.sendmail(self.user, [recipient], self.build_job_notification(drive, recipient).as_string())
                    logger.info(f"Notification email sent to {recipient}")
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending notification email: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to send notification email",
            )
        return len(recipients)


mailer = Mailer(settings.SMTP_HOST, settings.SMTP_PORT, settings.EMAIL_USER, settings.EMAIL_PASS)


def get_mailer() -> Mailer:
    return mailer
