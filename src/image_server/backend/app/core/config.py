from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from image_server.backend.app.domain.files.entities import StorageRoot


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', case_sensitive=True, extra='ignore')
    HOST: str = '0.0.0.0'
    PORT: int = 5000
    LOG_LEVEL: str = 'INFO'

    UPLOAD_DIR: Path = Path('uploads')
    CHAUFFEUR_UPLOAD_DIR: Path = Path('uploads/chouffeur')
    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    UPLOAD_CHUNK_SIZE: int = 64 * 1024
    # room for part headers and boundaries on top of MAX_FILE_SIZE
    MAX_MULTIPART_OVERHEAD: int = 64 * 1024
    ALLOWED_MIME_TYPES: list[str] = ['image/jpeg', 'image/png', 'image/gif']
    STATIC_MAX_AGE_SECONDS: int = 24 * 60 * 60

    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100

    # development default, tighten for production
    CORS_ALLOW_ORIGINS: list[str] = ['*']
    CORS_ALLOW_METHODS: list[str] = ['GET', 'POST', 'OPTIONS']
    CORS_ALLOW_HEADERS: list[str] = ['Content-Type', 'Authorization']

    def storage_roots(self) -> list[StorageRoot]:
        """Lookup order: primary first, then chauffeur."""
        return [
            StorageRoot(key='primary', directory=self.UPLOAD_DIR, url_prefix='/uploads/'),
            StorageRoot(
                key='chauffeur',
                directory=self.CHAUFFEUR_UPLOAD_DIR,
                filename_prefix='chauffeur_',
                url_prefix='/uploads/chouffeur/',
            ),
        ]


settings = Settings()
