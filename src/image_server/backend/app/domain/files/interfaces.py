from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from image_server.backend.app.domain.files.entities import StorageRoot, StoredFile


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes:
        ...


class UploadSource(AsyncReadable, Protocol):
    filename: str
    content_type: str

    async def finish(self) -> None:
        """
        Consume whatever follows the file in the request body.
        Raises when the rest of the body carries another file.
        """
        ...


@dataclass(frozen=True)
class Requester:
    client_host: str | None
    authorization: str | None = None


class ImageStorage(Protocol):
    def root(self, key: str) -> StorageRoot:
        ...

    async def save(
        self,
        *,
        root_key: str,
        source: AsyncReadable,
        original_filename: str,
        content_type: str,
        max_bytes: int,
    ) -> StoredFile:
        ...

    async def locate(self, filename: str) -> Path:
        """
        Return the first readable match across the roots, in order.
        """
        ...

    async def delete(self, filename: str) -> Path:
        ...


class AuthorizationPolicy(Protocol):
    async def authorize(self, *, requester: Requester, filename: str) -> bool:
        ...
