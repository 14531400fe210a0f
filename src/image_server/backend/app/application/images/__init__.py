from image_server.backend.app.application.images.dto import (
    UploadImageInputDTO,
    StoredImageDTO,
    GetImageInputDTO,
    ImageFileDTO,
    DeleteImageInputDTO,
)

__all__ = [
    "UploadImageInputDTO",
    "StoredImageDTO",
    "GetImageInputDTO",
    "ImageFileDTO",
    "DeleteImageInputDTO",
]
