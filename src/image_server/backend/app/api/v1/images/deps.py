from typing import Annotated

from fastapi import Depends, Request

from image_server.backend.app.api.v1.images.uploads import MultipartImageUpload, is_multipart
from image_server.backend.app.application.images.use_cases import (
    DeleteImageUseCase,
    GetImageUseCase,
    UploadImageUseCase,
)
from image_server.backend.app.core.config import Settings
from image_server.backend.app.core.deps import get_authorization_policy, get_image_storage, get_settings
from image_server.backend.app.domain.files.errors import FileTooLarge
from image_server.backend.app.domain.files.interfaces import AuthorizationPolicy, ImageStorage


async def get_upload_image_use_case(
        storage: Annotated[ImageStorage, Depends(get_image_storage)],
        settings: Annotated[Settings, Depends(get_settings)],
) -> UploadImageUseCase:
    return UploadImageUseCase(
        storage,
        allowed_mime_types=settings.ALLOWED_MIME_TYPES,
        max_file_size=settings.MAX_FILE_SIZE,
    )


async def get_image_upload(
        request: Request,
        settings: Annotated[Settings, Depends(get_settings)],
) -> MultipartImageUpload | None:
    """
    Open the ``image`` part of a multipart body without reading its data.
    None when the request carries no file at all.
    """
    content_length = request.headers.get("content-length", "")
    if content_length.isdigit() and int(content_length) > settings.MAX_FILE_SIZE + settings.MAX_MULTIPART_OVERHEAD:
        raise FileTooLarge(settings.MAX_FILE_SIZE)

    content_type = request.headers.get("content-type")
    if not is_multipart(content_type):
        return None

    upload = MultipartImageUpload(request.stream(), content_type, field_name="image")
    if not await upload.open_file():
        return None
    return upload


async def get_get_image_use_case(
        storage: Annotated[ImageStorage, Depends(get_image_storage)],
) -> GetImageUseCase:
    return GetImageUseCase(storage)


async def get_delete_image_use_case(
        storage: Annotated[ImageStorage, Depends(get_image_storage)],
        policy: Annotated[AuthorizationPolicy, Depends(get_authorization_policy)],
) -> DeleteImageUseCase:
    return DeleteImageUseCase(storage, policy)
