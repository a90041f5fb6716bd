import logging
import asyncio
import resend
from datetime import datetime, timezone
from typing import Optional
from fastapi import HTTPException, status
from app.core.config import settings
from app.utils.template_loader import template_loader

logger = logging.getLogger(__name__)


resend.api_key = settings.RESEND_API_KEY


async def _send_email_resend(to_email: str, subject: str, text: str, html: str, reply_to: Optional[str] = None):
    payload = {
        "from": f"{settings.EMAILS_FROM_NAME} <{settings.EMAILS_FROM_EMAIL}>",
        "to": [to_email],
        "subject": subject,
        "text": text,
        "html": html
    }
    if reply_to:
        payload["reply_to"] = reply_to

    try:
        await asyncio.to_thread(resend.Emails.send, payload)
        logger.info(f"Email sent to {to_email}")

    except Exception as e:
        logger.error(f"Email sending failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Email service temporarily unavailable"
        )


async def send_report_email(
    post_id: str,
    post_title: str,
    reason: str,
    reporter_email: Optional[str] = None
) -> None:
    """Notify moderators about a reported post. Never raises."""
    try:
        context = {
            "post_id": post_id,
            "post_title": post_title,
            "reason": reason,
            "reporter_email": reporter_email,
            "post_url": f"{str(settings.FRONTEND_URL).rstrip('/')}/posts",
        }
        html = template_loader.render_template("report_notification", context)
        text = template_loader.get_text_version(html)

        await _send_email_resend(
            settings.REPORTS_EMAIL,
            f"Post reported: {post_title[:60]}",
            text,
            html
        )
    except Exception as e:
        logger.error(f"Failed to send report email for post {post_id}: {str(e)}")
        # The report row is already stored; a lost email must not fail it


async def send_contact_email(name: str, email: str, subject: str, message: str) -> None:
    """Forward a contact form message to the team inbox"""
    context = {
        "name": name,
        "email": email,
        "subject": subject,
        "message": message,
        "received_at": datetime.now(timezone.utc).isoformat(),
    }
    html = template_loader.render_template("contact_message", context)
    text = template_loader.get_text_version(html)

    await _send_email_resend(
        settings.CONTACT_EMAIL,
        f"[Contact] {subject}",
        text,
        html,
        reply_to=email
    )
