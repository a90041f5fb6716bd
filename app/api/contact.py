import logging
from fastapi import APIRouter, status

from app.schemas.contact import ContactMessage, ContactAck
from app.core.email import send_contact_email
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import EMAIL_DELIVERY_ERROR

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactAck)
async def submit_contact_message(message_in: ContactMessage):
    """Forward a contact form message to the team inbox. No sign-in needed."""
    try:
        await send_contact_email(
            name=message_in.name,
            email=message_in.email,
            subject=message_in.subject,
            message=message_in.message,
        )
    except Exception as e:
        logger.error(f"Contact message from {message_in.email} not delivered: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Something went wrong. Please try again later.",
            error_code=EMAIL_DELIVERY_ERROR
        )
    return ContactAck()
