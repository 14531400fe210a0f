from image_server.backend.app.core.config import Settings, settings
from image_server.backend.app.core.deps import get_settings, get_image_storage, get_authorization_policy

__all__ = ['settings',
           'Settings',
           'get_settings',
           'get_image_storage',
           'get_authorization_policy']
