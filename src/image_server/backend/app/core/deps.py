from fastapi import Request

from image_server.backend.app.core.config import Settings
from image_server.backend.app.domain.files.interfaces import AuthorizationPolicy, ImageStorage
from image_server.backend.app.infrastructure.security.authorization import AllowAllPolicy


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_image_storage(request: Request) -> ImageStorage:
    """
    One storage per app, built in create_app.
    Swap implementation there without touching use cases.
    """
    return request.app.state.image_storage


def get_authorization_policy() -> AuthorizationPolicy:
    # override through app.dependency_overrides to plug in real auth
    return AllowAllPolicy()
