from __future__ import annotations

from image_server.backend.app.application.images.dto import GetImageInputDTO, ImageFileDTO
from image_server.backend.app.domain.files.interfaces import ImageStorage
from image_server.backend.app.domain.files.value_objects import ImageFilename


class GetImageUseCase:
    def __init__(self, storage: ImageStorage) -> None:
        self._storage = storage

    async def execute(self, dto: GetImageInputDTO) -> ImageFileDTO:
        filename = ImageFilename(dto.filename)
        path = await self._storage.locate(filename.value)
        return ImageFileDTO(filename=filename.value, path=path)
