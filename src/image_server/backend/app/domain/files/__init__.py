from image_server.backend.app.domain.files.entities import StoredFile, StorageRoot
from image_server.backend.app.domain.files.errors import (
    InvalidFilename,
    InvalidFileType,
    NoFileUploaded,
    FileTooLarge,
    ImageNotFound,
    ImageAccessForbidden,
    FailedToSaveImage,
    FailedToDeleteImage,
    UnexpectedFileField,
    MalformedUpload,
)
from image_server.backend.app.domain.files.value_objects import ImageFilename, is_valid_image_filename

__all__ = [
    "StoredFile",
    "StorageRoot",
    "ImageFilename",
    "is_valid_image_filename",
    "InvalidFilename",
    "InvalidFileType",
    "NoFileUploaded",
    "FileTooLarge",
    "ImageNotFound",
    "ImageAccessForbidden",
    "FailedToSaveImage",
    "FailedToDeleteImage",
    "UnexpectedFileField",
    "MalformedUpload",
]
