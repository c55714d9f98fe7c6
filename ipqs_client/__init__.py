"""IPQualityScore client - fraud detection and risk scoring API."""

from .client import Client
from .config import ClientConfig
from .errors import ApiError, ConfigurationError, is_error
from .transaction import TransactionBuilder

__version__ = "1.0.0"
__all__ = [
    "Client",
    "ClientConfig",
    "ApiError",
    "ConfigurationError",
    "is_error",
    "TransactionBuilder",
]
