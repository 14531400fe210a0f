from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import FileResponse

from image_server.backend.app.api.v1.images.deps import (
    get_delete_image_use_case,
    get_get_image_use_case,
    get_image_upload,
    get_upload_image_use_case,
)
from image_server.backend.app.api.v1.images.mappers import (
    get_delete_image_input_dto,
    get_get_image_input_dto,
    get_upload_image_input_dto,
    stored_image_to_response,
)
from image_server.backend.app.api.v1.images.schemas import DeleteImageResponse, ErrorResponse, UploadImageResponse
from image_server.backend.app.api.v1.images.uploads import MultipartImageUpload
from image_server.backend.app.application.images.use_cases import (
    DeleteImageUseCase,
    GetImageUseCase,
    UploadImageUseCase,
)
from image_server.backend.app.core.config import Settings
from image_server.backend.app.core.deps import get_settings
from image_server.backend.app.domain.files.errors import ImageNotFound, InvalidFilename, NoFileUploaded

router = APIRouter(tags=["images"])

upload_image_dep = Annotated[UploadImageUseCase, Depends(get_upload_image_use_case)]
get_image_dep = Annotated[GetImageUseCase, Depends(get_get_image_use_case)]
delete_image_dep = Annotated[DeleteImageUseCase, Depends(get_delete_image_use_case)]
settings_dep = Annotated[Settings, Depends(get_settings)]
image_upload_dep = Annotated[MultipartImageUpload | None, Depends(get_image_upload)]

upload_errors = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
lookup_errors = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@router.post("/upload", response_model=UploadImageResponse, responses=upload_errors)
async def upload_image(
        request: Request,
        use_case: upload_image_dep,
        image: image_upload_dep,
):
    if image is None:
        raise NoFileUploaded("No image file uploaded.")
    dto = get_upload_image_input_dto("primary", image)
    stored = await use_case.execute(dto)
    return stored_image_to_response(request, stored)


@router.post("/chouffeur", response_model=UploadImageResponse, responses=upload_errors)
async def upload_chauffeur_image(
        request: Request,
        use_case: upload_image_dep,
        image: image_upload_dep,
):
    if image is None:
        raise NoFileUploaded("No image uploaded for chouffeur.")
    dto = get_upload_image_input_dto("chauffeur", image)
    stored = await use_case.execute(dto)
    return stored_image_to_response(request, stored)


@router.get("/uploads/{filename}", response_class=FileResponse, responses=lookup_errors)
async def get_image(
        filename: str,
        use_case: get_image_dep,
):
    image = await use_case.execute(get_get_image_input_dto(filename))
    return FileResponse(image.path)


@router.api_route("/image/{filename}", methods=["GET", "HEAD"], response_class=FileResponse)
async def get_static_image(
        filename: str,
        use_case: get_image_dep,
        settings: settings_dep,
):
    # static semantics: anything that is not a stored image is simply not there
    try:
        image = await use_case.execute(get_get_image_input_dto(filename))
    except (InvalidFilename, ImageNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(
        image.path,
        headers={"Cache-Control": f"public, max-age={settings.STATIC_MAX_AGE_SECONDS}"},
    )


@router.delete(
    "/image/{filename}",
    response_model=DeleteImageResponse,
    responses={**lookup_errors, status.HTTP_403_FORBIDDEN: {"model": ErrorResponse}},
)
async def delete_image(
        filename: str,
        request: Request,
        use_case: delete_image_dep,
) -> DeleteImageResponse:
    dto = get_delete_image_input_dto(filename, request)
    await use_case.execute(dto)
    return DeleteImageResponse(message="Image deleted successfully.")
