from image_server.backend.app.middleware.errors import UnhandledErrorMiddleware
from image_server.backend.app.middleware.rate_limit import RateLimitMiddleware, get_client_ip
from image_server.backend.app.middleware.security_headers import SecurityHeadersMiddleware, add_security_headers

__all__ = [
    "UnhandledErrorMiddleware",
    "RateLimitMiddleware",
    "SecurityHeadersMiddleware",
    "add_security_headers",
    "get_client_ip",
]
