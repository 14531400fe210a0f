from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UploadImageResponse(BaseModel):
    """
    `url` is built from the storage root's url prefix. For chauffeur uploads
    it points at /uploads/chouffeur/, which no route serves; clients fetch
    images through /uploads/{filename} or /image/{filename}.
    """
    success: bool = True
    url: str
    filename: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "url": "http://localhost:5000/uploads/0b6f3c4e-5a8e-4f7e-9d4c-2a1d3f9e8b7a.jpg",
                "filename": "0b6f3c4e-5a8e-4f7e-9d4c-2a1d3f9e8b7a.jpg",
            }
        }
    )


class DeleteImageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str | None = None
