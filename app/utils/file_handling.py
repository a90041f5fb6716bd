import asyncio
import json
import logging
import time
import uuid
from typing import Optional

from fastapi import UploadFile, status
from google.cloud import storage
from google.oauth2 import service_account

from app.core.config import settings
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import INVALID_FILE_TYPE, FILE_TOO_LARGE, FILE_UPLOAD_ERROR

logger = logging.getLogger(__name__)

_storage_client: Optional[storage.Client] = None


def get_storage_client() -> storage.Client:
    """Create the GCS client on first use."""
    global _storage_client
    if _storage_client is None:
        try:
            credentials_json = settings.GCS_CREDENTIALS_JSON
            if credentials_json:
                credentials = service_account.Credentials.from_service_account_info(
                    json.loads(credentials_json)
                )
                _storage_client = storage.Client(
                    credentials=credentials,
                    project=settings.GCS_PROJECT_ID
                )
            else:
                _storage_client = storage.Client(project=settings.GCS_PROJECT_ID)
        except Exception as e:
            logger.error(f"Failed to initialize GCS client: {str(e)}")
            raise RuntimeError("Could not initialize cloud storage")
    return _storage_client


def _file_size(file: UploadFile) -> int:
    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(0)
    return size


def _file_extension(file: UploadFile) -> str:
    filename = file.filename or ""
    if "." in filename:
        return filename.rsplit(".", 1)[-1].lower()
    return (file.content_type or "image/png").split("/", 1)[-1]


def validate_image(file: UploadFile, max_size: int) -> None:
    """Reject anything that is not an image or is over the size ceiling."""
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise CustomHTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please upload an image file.",
            error_code=INVALID_FILE_TYPE
        )

    if _file_size(file) > max_size:
        raise CustomHTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Please upload an image smaller than {max_size // (1024 * 1024)}MB.",
            error_code=FILE_TOO_LARGE
        )


async def upload_image(file: UploadFile, bucket_name: str, blob_path: str) -> str:
    """Upload to a bucket and return the object's public URL"""
    blob = get_storage_client().bucket(bucket_name).blob(blob_path)
    await asyncio.to_thread(
        blob.upload_from_file,
        file.file,
        content_type=file.content_type,
        rewind=True
    )
    logger.info(f"Uploaded {blob_path} to {bucket_name}")
    return settings.public_url(bucket_name, blob_path)


async def save_post_image(file: UploadFile) -> str:
    validate_image(file, settings.MAX_POST_IMAGE_SIZE)
    blob_path = f"{uuid.uuid4()}.{_file_extension(file)}"
    try:
        return await upload_image(file, settings.POST_IMAGES_BUCKET, blob_path)
    except Exception as e:
        logger.error(f"Post image upload failed: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed. Please try again.",
            error_code=FILE_UPLOAD_ERROR
        )


async def save_avatar(file: UploadFile, user_id: str) -> str:
    """
    Store the avatar at a fixed per-user path (overwriting the previous one)
    and return a cache-busted URL so clients refetch the new image.
    """
    validate_image(file, settings.MAX_AVATAR_SIZE)
    blob_path = settings.AVATAR_PATH.format(user_id=user_id, ext=_file_extension(file))
    try:
        public_url = await upload_image(file, settings.AVATARS_BUCKET, blob_path)
    except Exception as e:
        logger.error(f"Avatar upload failed for {user_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload avatar. Please try again.",
            error_code=FILE_UPLOAD_ERROR
        )
    return f"{public_url}?t={int(time.time() * 1000)}"


async def delete_file(url: str) -> bool:
    """Delete a stored object by its public URL"""
    try:
        for bucket_name in (settings.POST_IMAGES_BUCKET, settings.AVATARS_BUCKET):
            prefix = f"{settings.public_url(bucket_name, '')}"
            if url.startswith(prefix):
                blob_path = url[len(prefix):].split("?", 1)[0]
                blob = get_storage_client().bucket(bucket_name).blob(blob_path)
                await asyncio.to_thread(blob.delete)
                logger.info(f"Deleted: {bucket_name}/{blob_path}")
                return True

        logger.error(f"Invalid URL format for deletion: {url}")
        return False

    except Exception as e:
        logger.error(f"Deletion failed: {str(e)}")
        return False
