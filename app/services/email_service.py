"""
Email service - transactional email templates and dispatch.

Every user-supplied value is HTML-escaped before it goes into a template.
Sending is delegated to the Resend client; failures propagate.
"""
from html import escape
from typing import Optional, Tuple

from app.core.config import settings
from app.core.logging import get_logger
from app.core.resend import ResendClient
from app.models.application import STATUS_REJECTED, STATUS_SHORTLISTED

logger = get_logger(__name__)

_CARD_OPEN = (
    '<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto; '
    'padding: 20px; border: 1px solid #eee; border-radius: 10px;">'
)
_CARD_CLOSE = "</div>"
_RULE = '<hr style="border: none; border-top: 1px solid #eee; margin: 20px 0;" />'
_FOOTER = '<p style="color: #666; font-size: 12px;">Thank you for using JobToken.</p>'


def _card(*parts: str) -> str:
    return "\n".join([_CARD_OPEN, *parts, _CARD_CLOSE])


def render_application_confirmation(job_title: Optional[str]) -> Tuple[str, str]:
    """Subject and HTML for the "application received" receipt."""
    subject = f"Application Confirmed: {job_title or 'New Job'}"
    html = _card(
        '<h2 style="color: #10b981;">Application Received!</h2>',
        f"<p>Your application for <strong>{escape(job_title or 'the position')}</strong> "
        "has been successfully submitted.</p>",
        "<p>The employer has been notified and will review your profile shortly.</p>",
        _RULE,
        _FOOTER,
    )
    return subject, html


def render_verification(link: str) -> Tuple[str, str]:
    """Subject and HTML for the magic-link verification email."""
    safe_link = escape(link, quote=True)
    subject = "Verify your JobToken account"
    html = _card(
        '<h2 style="color: #10b981;">Welcome to JobToken!</h2>',
        "<p>Please click the button below to verify your email address and start "
        "applying for jobs.</p>",
        f'<a href="{safe_link}" style="display: inline-block; background: #10b981; '
        "color: white; padding: 12px 24px; border-radius: 6px; text-decoration: none; "
        'font-weight: bold; margin: 20px 0;">Verify Email</a>',
        '<p style="color: #666; font-size: 14px;">If the button doesn\'t work, copy and '
        "paste this link into your browser:</p>",
        f'<p style="color: #666; font-size: 12px; word-break: break-all;">{safe_link}</p>',
    )
    return subject, html


def render_status_update(
    status: str,
    *,
    applicant_name: Optional[str],
    job_title: str,
    notes: Optional[str] = None,
) -> Optional[Tuple[str, str]]:
    """
    Subject and HTML for an application status change.

    Returns None for statuses that don't notify the applicant.
    """
    name = escape(applicant_name or "there")
    title = escape(job_title)

    if status == STATUS_SHORTLISTED:
        parts = [
            f'<h2 style="color: #10b981;">Great news, {name}!</h2>',
            f"<p>The employer for <strong>'{title}'</strong> has shortlisted you. "
            "They will contact you shortly via this email.</p>",
        ]
        if notes:
            parts.append(f"<p><strong>Employer Note:</strong> {escape(notes)}</p>")
        return (
            f"Great news: You've been shortlisted for {job_title}",
            _card(*parts, _RULE, _FOOTER),
        )

    if status == STATUS_REJECTED:
        return (
            f"Update on your application for {job_title}",
            _card(
                f"<p>Hi {name},</p>",
                f"<p>Thank you for applying to <strong>'{title}'</strong>. Unfortunately, "
                "the employer has decided to move forward with other candidates at this "
                "time.</p>",
                "<p>We wish you the best in your job search.</p>",
                _RULE,
                _FOOTER,
            ),
        )

    return None


class EmailService:
    """Renders and sends the platform's transactional emails."""

    def __init__(self, mailer: Optional[ResendClient] = None):
        self.mailer = mailer or ResendClient()

    async def send_application_confirmation(
        self,
        email: str,
        job_title: Optional[str],
    ) -> None:
        subject, html = render_application_confirmation(job_title)
        await self.mailer.send(
            sender=settings.email_from_notifications,
            to=[email],
            subject=subject,
            html=html,
        )

    async def send_verification(self, email: str, link: str) -> None:
        subject, html = render_verification(link)
        await self.mailer.send(
            sender=settings.email_from_onboarding,
            to=[email],
            subject=subject,
            html=html,
        )

    async def send_status_update(
        self,
        email: str,
        *,
        status: str,
        applicant_name: Optional[str],
        job_title: str,
        notes: Optional[str] = None,
    ) -> bool:
        """Send the status email if this status has one. Returns whether it sent."""
        rendered = render_status_update(
            status,
            applicant_name=applicant_name,
            job_title=job_title,
            notes=notes,
        )
        if rendered is None:
            logger.info("status_email_skipped", status=status)
            return False

        subject, html = rendered
        await self.mailer.send(
            sender=settings.email_from_notifications,
            to=[email],
            subject=subject,
            html=html,
        )
        return True
