"""
Booking notification email.
Renders the HTML templates under templates/email with Jinja2 and sends them
over SMTP.

The send-email route uses send_booking_notification. The send_booking_received,
send_admin_notification, send_booking_approved and send_status_update helpers
are library entry points for the booking workflow that runs outside this
gateway; they never raise and report the outcome as a dict.
"""
import logging
import smtplib
import ssl
from dataclasses import dataclass
from datetime import date, datetime
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.concurrency import run_in_threadpool

from studio_gateway.config import settings
from studio_gateway.schemas import Booking

logger = logging.getLogger(__name__)

# subject prefix, heading, lead paragraph
NOTIFICATION_COPY: Dict[str, tuple] = {
    "confirmation": (
        "Booking Confirmation",
        "Booking Confirmed!",
        "Thank you for booking with us! We're excited to confirm your {service} appointment.",
    ),
    "update": (
        "Booking Update",
        "Your Booking Has Been Updated",
        "We wanted to let you know that your booking has been updated.",
    ),
    "cancellation": (
        "Booking Cancellation",
        "Booking Cancellation Notice",
        "We regret to inform you that your booking has been cancelled.",
    ),
    "custom": (
        "Message Regarding Your Booking",
        "Update on Your Booking",
        "",
    ),
}

NOTIFICATION_BADGES = {
    "confirmed": {"bg": "#d4edda", "text": "#155724"},
    "pending": {"bg": "#fff3cd", "text": "#856404"},
    "cancelled": {"bg": "#f8d7da", "text": "#721c24"},
}
DEFAULT_NOTIFICATION_BADGE = {"bg": "#d1ecf1", "text": "#0c5460"}

STATUS_THEMES = {
    "confirmed": {"bg": "#d1fae5", "text": "#065f46", "gradient": "linear-gradient(135deg, #10b981 0%, #059669 100%)"},
    "completed": {"bg": "#dbeafe", "text": "#1e40af", "gradient": "linear-gradient(135deg, #3b82f6 0%, #2563eb 100%)"},
    "cancelled": {"bg": "#fee2e2", "text": "#991b1b", "gradient": "linear-gradient(135deg, #ef4444 0%, #dc2626 100%)"},
    "pending": {"bg": "#fef3c7", "text": "#92400e", "gradient": "linear-gradient(135deg, #f59e0b 0%, #d97706 100%)"},
}


def long_date(value: Any) -> str:
    """Format an ISO date as "Monday, June 1, 2026"; unparseable values are returned as is."""
    if isinstance(value, (date, datetime)):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            return str(value)
    return f"{parsed:%A}, {parsed:%B} {parsed.day}, {parsed.year}"


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)
templates.filters["long_date"] = long_date


@dataclass
class RenderedEmail:
    subject: str
    html: str


def _default_smtp_factory(host: str, port: int, secure: bool, timeout: float) -> smtplib.SMTP:
    if secure:
        return smtplib.SMTP_SSL(host, port, timeout=timeout, context=ssl.create_default_context())
    return smtplib.SMTP(host, port, timeout=timeout)


class BookingMailer:
    """
    Renders and sends booking emails.

    Args:
        host, port, secure, user, password: SMTP connection settings
        admin_email: Studio inbox; sender of admin-triggered notifications
        studio_name: Name printed in signatures
        sender_name: From name of the booking workflow emails
        smtp_factory: Callable returning an smtplib.SMTP-like connection
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        secure: bool = False,
        user: str = "",
        password: str = "",
        admin_email: str = "",
        studio_name: str = "G-Limit Studio",
        sender_name: str = "G-Limit Photography",
        timeout: float = 30.0,
        smtp_factory: Optional[Callable[..., Any]] = None,
    ):
        self.host = host
        self.port = port
        self.secure = secure
        self.user = user
        self.password = password
        self.admin_email = admin_email
        self.studio_name = studio_name
        self.sender_name = sender_name
        self.timeout = timeout
        self.smtp_factory = smtp_factory or _default_smtp_factory

    @classmethod
    def from_settings(cls) -> "BookingMailer":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            secure=settings.SMTP_SECURE,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASS,
            admin_email=settings.ADMIN_EMAIL,
            studio_name=settings.STUDIO_NAME,
            sender_name=settings.MAIL_SENDER_NAME,
            timeout=settings.SMTP_TIMEOUT,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.host)

    # Rendering

    def render_notification(self, booking: Booking, custom_message: str, email_type: str) -> RenderedEmail:
        """
        Render the admin-triggered notification for a booking.

        Args:
            booking: Booking fetched from the backend
            custom_message: Free text from the admin, shown in its own block
            email_type: confirmation, update, cancellation or custom

        Returns:
            RenderedEmail: Subject and HTML body

        Raises:
            ValueError: If email_type is unknown
        """
        if email_type not in NOTIFICATION_COPY:
            raise ValueError(f"Unknown email type: {email_type}")

        prefix, heading, body_text = NOTIFICATION_COPY[email_type]
        subject = f"{prefix} - {booking.service_type}"
        html = templates.get_template("email/booking_notification.html").render(
            subject=subject,
            heading=heading,
            body_text=body_text.format(service=booking.service_type),
            custom_message=custom_message,
            booking=booking,
            badge=NOTIFICATION_BADGES.get(booking.status, DEFAULT_NOTIFICATION_BADGE),
            studio_name=self.studio_name,
        )
        return RenderedEmail(subject=subject, html=html)

    def render_booking_received(self, booking: Booking) -> RenderedEmail:
        html = templates.get_template("email/booking_received.html").render(
            booking=booking,
            studio_name=self.studio_name,
            header_background="linear-gradient(135deg, #d4a574 0%, #8b6f47 100%)",
            label_color="#8b6f47",
            badge={"bg": "#fef3c7", "text": "#92400e"},
        )
        return RenderedEmail(subject=f"Booking Confirmation - {self.studio_name}", html=html)

    def render_admin_notification(self, booking: Booking) -> RenderedEmail:
        html = templates.get_template("email/admin_notification.html").render(
            booking=booking,
            studio_name=self.studio_name,
            header_background="#1f2937",
            label_color="#1f2937",
            badge=DEFAULT_NOTIFICATION_BADGE,
        )
        return RenderedEmail(
            subject=f"New Booking Request - {booking.first_name} {booking.last_name}",
            html=html,
        )

    def render_booking_approved(self, booking: Booking) -> RenderedEmail:
        html = templates.get_template("email/booking_approved.html").render(
            booking=booking,
            studio_name=self.studio_name,
            header_background="linear-gradient(135deg, #10b981 0%, #059669 100%)",
            label_color="#059669",
            badge={"bg": "#d1fae5", "text": "#065f46"},
        )
        return RenderedEmail(subject=f"Booking Approved - {self.studio_name}", html=html)

    def render_status_update(self, booking: Booking, old_status: str) -> RenderedEmail:
        theme = STATUS_THEMES.get(booking.status, STATUS_THEMES["pending"])
        html = templates.get_template("email/status_update.html").render(
            booking=booking,
            old_status=old_status,
            studio_name=self.studio_name,
            header_background=theme["gradient"],
            label_color="#1f2937",
            badge=theme,
        )
        return RenderedEmail(subject=f"Booking Status Update - {booking.status.capitalize()}", html=html)

    # Sending

    def send(self, to: str, email: RenderedEmail, from_name: str, from_address: str) -> str:
        """
        Deliver one email over SMTP.

        Returns:
            str: Message-ID of the sent message

        Raises:
            ValueError: If SMTP or the recipient is not configured
            smtplib.SMTPException, OSError: If delivery fails
        """
        if not self.is_configured:
            raise ValueError("SMTP_HOST not configured")
        if not to:
            raise ValueError("Recipient address is missing")

        message = EmailMessage()
        message["Subject"] = email.subject
        message["From"] = formataddr((from_name, from_address))
        message["To"] = to
        domain = from_address.rpartition("@")[2] or None
        message["Message-ID"] = make_msgid(domain=domain)
        message.set_content(f"{email.subject}\n\nThis message is best viewed in an HTML capable email client.")
        message.add_alternative(email.html, subtype="html")

        with self.smtp_factory(self.host, self.port, self.secure, self.timeout) as smtp:
            if not self.secure:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls(context=ssl.create_default_context())
                    smtp.ehlo()
            if self.user:
                smtp.login(self.user, self.password)
            smtp.send_message(message)

        logger.info(f"Email sent to {to}: {message['Message-ID']}")
        return message["Message-ID"]

    async def send_booking_notification(self, booking: Booking, custom_message: str, email_type: str) -> str:
        """Render and send the admin-triggered notification; errors propagate to the caller."""
        email = self.render_notification(booking, custom_message, email_type)
        return await run_in_threadpool(self.send, booking.email, email, "Booking System", self.admin_email)

    async def _deliver(self, to: str, email: RenderedEmail, description: str) -> dict:
        try:
            await run_in_threadpool(self.send, to, email, self.sender_name, self.user)
            logger.info(f"{description} email sent to: {to}")
            return {"success": True}
        except Exception as e:
            logger.error(f"Error sending {description} email: {str(e)}", exc_info=True)
            return {"success": False, "error": str(e)}

    async def send_booking_received(self, booking: Booking) -> dict:
        return await self._deliver(booking.email, self.render_booking_received(booking), "Booking confirmation")

    async def send_admin_notification(self, booking: Booking) -> dict:
        return await self._deliver(self.admin_email, self.render_admin_notification(booking), "Admin notification")

    async def send_booking_approved(self, booking: Booking) -> dict:
        return await self._deliver(booking.email, self.render_booking_approved(booking), "Booking approval")

    async def send_status_update(self, booking: Booking, old_status: str) -> dict:
        return await self._deliver(
            booking.email, self.render_status_update(booking, old_status), "Booking status update"
        )


def get_mailer() -> BookingMailer:
    """FastAPI dependency returning a mailer built from settings."""
    return BookingMailer.from_settings()
