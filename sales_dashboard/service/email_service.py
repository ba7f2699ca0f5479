import asyncio
import logging
import smtplib
import socket
from email.message import EmailMessage

from fastapi import HTTPException, status

from sales_dashboard.core.config import Settings, settings as default_settings
from sales_dashboard.schemas.email import SendReportRequest, SendReportResponse

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "Automatic Sales Report"

GMAIL_HOST = "smtp.gmail.com"
GMAIL_PORT = 587


class EmailService:
    def __init__(self, config: Settings = default_settings):
        self.config = config

    def _connect(self) -> smtplib.SMTP:
        user = self.config.EMAIL_USER or ""
        if user.endswith("@gmail.com"):
            smtp = smtplib.SMTP(GMAIL_HOST, GMAIL_PORT, timeout=30)
            smtp.starttls()
            return smtp
        if self.config.SMTP_SECURE:
            return smtplib.SMTP_SSL(self.config.SMTP_HOST, self.config.SMTP_PORT, timeout=30)
        return smtplib.SMTP(self.config.SMTP_HOST, self.config.SMTP_PORT, timeout=30)

    def _send(self, message: EmailMessage) -> None:
        with self._connect() as smtp:
            smtp.login(self.config.EMAIL_USER, self.config.EMAIL_PASSWORD)
            smtp.send_message(message)

    async def send_report(self, data: SendReportRequest) -> SendReportResponse:
        if not data.recipient_email or not data.report_html:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing recipient_email or report_html",
            )
        if not self.config.EMAIL_USER or not self.config.EMAIL_PASSWORD:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Email service not configured: set EMAIL_USER and EMAIL_PASSWORD",
            )

        message = EmailMessage()
        message["From"] = self.config.EMAIL_USER
        message["To"] = data.recipient_email
        message["Subject"] = data.report_subject or DEFAULT_SUBJECT
        message.set_content("This report is best viewed in an HTML-capable mail client.")
        message.add_alternative(data.report_html, subtype="html")

        try:
            # smtplib blocks, keep it off the event loop
            await asyncio.to_thread(self._send, message)
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Email authentication failed: check EMAIL_USER and EMAIL_PASSWORD",
            )
        except (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected, socket.gaierror, ConnectionError) as e:
            logger.error(f"SMTP connection failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="SMTP server connection failed: check SMTP settings",
            )
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email sending error: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to send email: {e}",
            )

        logger.info("Report sent to %s", data.recipient_email)
        return SendReportResponse(message="Email sent successfully", email=data.recipient_email)
