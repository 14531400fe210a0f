class InvalidFilename(Exception):
    def __init__(self, message: str = "Invalid filename."):
        super().__init__(message)


class InvalidFileType(Exception):
    def __init__(self, content_type: str | None = None):
        self.content_type = content_type
        super().__init__("Invalid file type. Only JPEG, PNG, and GIF images are allowed.")


class NoFileUploaded(Exception):
    def __init__(self, message: str = "No image file uploaded."):
        super().__init__(message)


class FileTooLarge(Exception):
    code = "LIMIT_FILE_SIZE"

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(
            f"File too large. Maximum size is {max_bytes / 1024 / 1024:g}MB."
        )


class ImageNotFound(Exception):
    def __init__(self, filename: str):
        self.filename = filename
        super().__init__("Image not found.")


class ImageAccessForbidden(Exception):
    def __init__(self, filename: str):
        self.filename = filename
        super().__init__("Forbidden: You do not have permission.")


class FailedToSaveImage(Exception):
    def __init__(self, filename: str):
        super().__init__(f"Failed to save image {filename}")


class FailedToDeleteImage(Exception):
    def __init__(self, filename: str):
        super().__init__(f"Failed to delete image {filename}")


class UnexpectedFileField(Exception):
    code = "LIMIT_UNEXPECTED_FILE"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__("Unexpected file field. Ensure the field name is correct.")


class MalformedUpload(Exception):
    def __init__(self, message: str = "Malformed multipart body."):
        super().__init__(message)
