from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StorageRoot:
    key: str
    directory: Path
    filename_prefix: str = ""
    url_prefix: str = "/uploads/"


@dataclass
class StoredFile:
    filename: str
    directory: Path
    size_bytes: int
    content_type: str

    @property
    def path(self) -> Path:
        return self.directory / self.filename
