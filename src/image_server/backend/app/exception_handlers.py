import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from image_server.backend.app.domain.files.errors import (
    FailedToDeleteImage,
    FailedToSaveImage,
    FileTooLarge,
    ImageAccessForbidden,
    ImageNotFound,
    InvalidFilename,
    InvalidFileType,
    MalformedUpload,
    NoFileUploaded,
    UnexpectedFileField,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, **extra},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidFilename)
    async def invalid_filename(_: Request, exc: InvalidFilename):
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(InvalidFileType)
    async def invalid_file_type(_: Request, exc: InvalidFileType):
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(NoFileUploaded)
    async def no_file_uploaded(_: Request, exc: NoFileUploaded):
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(FileTooLarge)
    async def file_too_large(_: Request, exc: FileTooLarge):
        logger.warning("Upload rejected: %s", exc)
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc), code=exc.code)

    @app.exception_handler(UnexpectedFileField)
    async def unexpected_file_field(_: Request, exc: UnexpectedFileField):
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc), code=exc.code)

    @app.exception_handler(MalformedUpload)
    async def malformed_upload(_: Request, exc: MalformedUpload):
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(ImageAccessForbidden)
    async def image_access_forbidden(_: Request, exc: ImageAccessForbidden):
        return error_response(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(ImageNotFound)
    async def image_not_found(_: Request, exc: ImageNotFound):
        return error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(FailedToSaveImage)
    async def failed_to_save_image(_: Request, exc: FailedToSaveImage):
        logger.exception("Failed to save image", exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save image")

    @app.exception_handler(FailedToDeleteImage)
    async def failed_to_delete_image(_: Request, exc: FailedToDeleteImage):
        logger.exception("Failed to delete image", exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete image")

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(_: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception(_: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            error = "Not Found"
        else:
            error = str(exc.detail)
        return error_response(exc.status_code, error)

    @app.exception_handler(Exception)
    async def unhandled_exception(_: Request, exc: Exception):
        logger.exception("Unhandled exception", exc_info=exc)

        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
