import logging
import smtplib
import ssl
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional

from eventpro.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.smtp_server = self.settings.SMTP_SERVER
        self.smtp_port = self.settings.SMTP_PORT
        self.username = self.settings.SMTP_USERNAME
        self.password = self.settings.SMTP_PASSWORD
        self.from_email = self.settings.FROM_EMAIL
        self.from_name = self.settings.FROM_NAME

    def send_email(
        self,
        to_emails: List[str],
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """Send an email over SMTP with STARTTLS. Returns False on failure."""

        if not self.settings.SEND_EMAILS:
            logger.info(f"Email sending disabled. Would send: {subject} to {to_emails}")
            return True

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = ", ".join(to_emails)

            if text_content:
                message.attach(MIMEText(text_content, "plain"))
            message.attach(MIMEText(html_content, "html"))

            context = ssl.create_default_context()

            with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=self.settings.EMAIL_TIMEOUT) as server:
                server.starttls(context=context)
                if self.username:
                    server.login(self.username, self.password)
                server.sendmail(self.from_email, to_emails, message.as_string())

            logger.info(f"Email sent successfully to {to_emails}")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_emails}: {str(e)}")
            return False

    def _wrap(self, title: str, body_html: str) -> str:
        year = datetime.utcnow().year
        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <title>{title}</title>
        </head>
        <body style="font-family: Arial, sans-serif; margin: 0; padding: 20px; background-color: #f5f5f5;">
            <div style="max-width: 600px; margin: 0 auto; background-color: white; padding: 30px; border-radius: 5px; border: 1px solid #e0e0e0;">
                <div style="text-align: center; margin-bottom: 20px;">
                    <h1 style="color: #4f46e5;">{self.settings.PROJECT_NAME}</h1>
                </div>
                {body_html}
                <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e0e0e0; color: #666; font-size: 12px;">
                    <p>&copy; {year} {self.settings.ORGANIZATION_NAME}. All rights reserved.</p>
                    <p>This is an automated email, please do not reply.</p>
                </div>
            </div>
        </body>
        </html>
        """

    def send_password_reset_email(self, to_email: str, reset_link: str) -> bool:
        subject = f"{self.settings.PROJECT_NAME} - Password Reset Request"
        expires = self.settings.PASSWORD_RESET_EXPIRE_MINUTES
        body = f"""
                <p>Hello,</p>
                <p>We received a request to reset your password. To complete the process, please click the button below:</p>
                <div style="text-align: center; margin: 30px 0;">
                    <a href="{reset_link}" style="background-color: #4f46e5; color: white; padding: 12px 24px; text-decoration: none; border-radius: 4px; font-weight: bold;">Reset Password</a>
                </div>
                <p>If you didn't request a password reset, you can safely ignore this email.</p>
                <p>This link will expire in {expires} minutes.</p>
        """
        text_content = (
            "You requested to reset your password. Please open the following link to reset it: "
            f"{reset_link}\n\nThis link will expire in {expires} minutes."
        )
        return self.send_email([to_email], subject, self._wrap(subject, body), text_content)

    def send_registration_confirmation(
        self, to_email: str, name: str, event_title: str, event_date, venue: str
    ) -> bool:
        subject = f"You're registered: {event_title}"
        body = f"""
                <p>Hello {name},</p>
                <p>Your registration for <strong>{event_title}</strong> is confirmed.</p>
                <p><strong>Date:</strong> {event_date}<br><strong>Venue:</strong> {venue}</p>
                <p>Your certificate of attendance will be available once your attendance has been recorded.</p>
        """
        text_content = (
            f"Hello {name},\n\nYour registration for {event_title} on {event_date} at {venue} is confirmed."
        )
        return self.send_email([to_email], subject, self._wrap(subject, body), text_content)
