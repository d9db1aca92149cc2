"""
Images API Router
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response

from api.auth_context import AuthContext, get_auth_context
from api.auth_middleware import get_current_user
from api.dependencies import get_image_repository
from api.error_handling import bad_request, forbidden_roles, handle_db_errors, not_found_item
from api.models import ImageInfoResponse
from domain.image import Image
from domain.user import User
from repositories.image_repository import ImageRepository

router = APIRouter(prefix="/images", tags=["images"])

ALLOWED_CONTENT_TYPES = ("image/png", "image/jpeg", "image/gif")
DEFAULT_MAX_SIZE = 1024 * 1024


def _image_info(image: Image) -> ImageInfoResponse:
    return ImageInfoResponse(id=image.id, type=image.content_type, size=image.size)


def check_upload_roles(user: User, image_config: dict) -> bool:
    """Whether the user may upload images under the configured policy."""
    if image_config.get("upload_requires_admin", False):
        return user.is_admin
    return True


@router.get("/{image_id}")
@handle_db_errors("fetch image")
def get_image(image_id: UUID, images: ImageRepository = Depends(get_image_repository)):
    """Raw image data with its stored content type."""
    image = images.get(image_id)
    if image is None or not image.data or not image.content_type:
        raise not_found_item("Image", image_id)
    return Response(content=image.data, media_type=image.content_type)


@router.get("/{image_id}/info", response_model=ImageInfoResponse)
@handle_db_errors("fetch image info")
def get_image_info(image_id: UUID, images: ImageRepository = Depends(get_image_repository)):
    """Image metadata."""
    image = images.get(image_id)
    if image is None or not image.data or not image.content_type:
        raise not_found_item("Image", image_id)
    return _image_info(image)


@router.post("", response_model=ImageInfoResponse)
@handle_db_errors("image upload")
async def upload_image(
    request: Request,
    user: User = Depends(get_current_user),
    images: ImageRepository = Depends(get_image_repository),
    context: AuthContext = Depends(get_auth_context),
):
    """
    Uploads an image sent as the raw request body.

    The Content-Type header must be image/png, image/jpeg or image/gif and
    the body must not exceed the configured size limit (default 1 MiB).
    """
    image_config = context.config.get("images", {})
    max_size = int(image_config.get("max_size_bytes", DEFAULT_MAX_SIZE))

    if not check_upload_roles(user, image_config):
        raise forbidden_roles("Admin")

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise bad_request("File must be PNG, JPG, or GIF")

    declared_length = request.headers.get("content-length")
    if declared_length and declared_length.isdigit() and int(declared_length) > max_size:
        raise bad_request(f"File must be less than {max_size} bytes in size")

    data = bytearray()
    async for chunk in request.stream():
        data.extend(chunk)
        if len(data) > max_size:
            raise bad_request(f"File must be less than {max_size} bytes in size")

    if not data:
        raise bad_request("File is empty")

    image = Image(content_type=content_type, data=bytes(data))
    images.insert(image)
    images.commit()
    return _image_info(image)
