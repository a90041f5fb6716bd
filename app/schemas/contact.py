from pydantic import BaseModel, EmailStr, Field, field_validator

MISSING_FIELDS_MESSAGE = "Please fill in all fields."


class ContactMessage(BaseModel):
    """Message sent from the contact page"""
    name: str = Field(..., max_length=100)
    email: EmailStr = Field(..., max_length=255)
    subject: str = Field(..., max_length=200)
    message: str = Field(..., max_length=1000)

    @field_validator("name", "email", "subject", "message", mode="before")
    @classmethod
    def require_all_fields(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError(MISSING_FIELDS_MESSAGE)
        return v.strip()


class ContactAck(BaseModel):
    title: str = "Message sent!"
    description: str = "Thank you for contacting us. We'll get back to you soon."
