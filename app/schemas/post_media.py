from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    image_url: str  # Public URL to send back with the post
