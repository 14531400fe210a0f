from .upload_image import UploadImageUseCase
from .get_image import GetImageUseCase
from .delete_image import DeleteImageUseCase

__all__ = [
    "UploadImageUseCase",
    "GetImageUseCase",
    "DeleteImageUseCase",
]
