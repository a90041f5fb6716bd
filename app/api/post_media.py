from fastapi import APIRouter, UploadFile, File, Depends
from app.schemas.auth import AuthUser
from app.core.security import require_user
from app.utils.file_handling import save_post_image
from app.schemas.post_media import ImageUploadResponse

router = APIRouter(prefix="/media", tags=["media post"])

@router.post(
    "/post-image",
    response_model=ImageUploadResponse,
    summary="Upload the image attached to a new post"
)
async def upload_post_image(
    file: UploadFile = File(...),
    current_user: AuthUser = Depends(require_user)
):
    """
    Upload one image (max 5MB) for a post that is about to be created.
    Returns the public URL to send as `image_url` with the post.
    """
    image_url = await save_post_image(file)
    return {"image_url": image_url}
