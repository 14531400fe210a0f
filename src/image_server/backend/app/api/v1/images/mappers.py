from fastapi import Request

from image_server.backend.app.api.v1.images.schemas import UploadImageResponse
from image_server.backend.app.api.v1.images.uploads import MultipartImageUpload
from image_server.backend.app.application.images.dto import (
    DeleteImageInputDTO,
    GetImageInputDTO,
    StoredImageDTO,
    UploadImageInputDTO,
)
from image_server.backend.app.domain.files.interfaces import Requester


def get_upload_image_input_dto(root_key: str, upload: MultipartImageUpload) -> UploadImageInputDTO:
    return UploadImageInputDTO(
        root_key=root_key,
        source=upload,
        original_filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
    )


def get_get_image_input_dto(filename: str) -> GetImageInputDTO:
    return GetImageInputDTO(filename=filename)


def get_delete_image_input_dto(filename: str, request: Request) -> DeleteImageInputDTO:
    return DeleteImageInputDTO(
        filename=filename,
        requester=Requester(
            client_host=request.client.host if request.client else None,
            authorization=request.headers.get("authorization"),
        ),
    )


def stored_image_to_response(request: Request, dto: StoredImageDTO) -> UploadImageResponse:
    # Host header as sent by the client, same as the original upload URLs
    url = f"{request.url.scheme}://{request.url.netloc}{dto.url_prefix}{dto.filename}"
    return UploadImageResponse(url=url, filename=dto.filename)
