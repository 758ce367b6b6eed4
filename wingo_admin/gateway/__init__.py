from .base import BackendGateway
from .http_api import HttpBackendGateway, HttpBackendGatewayConfig

__all__ = [
    "BackendGateway",
    "HttpBackendGateway",
    "HttpBackendGatewayConfig",
]
