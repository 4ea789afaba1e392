"""Core module exports."""
from app.core.config import settings, get_settings
from app.core.database import Base, get_db, init_db, close_db, engine, async_session_maker
from app.core.security import create_access_token, decode_token
from app.core.exceptions import (
    APIException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
    InternalServerException,
    InvalidTokenException,
    UserNotFoundException,
    WalletNotFoundException,
    ApplicationNotFoundException,
    JobNotFoundException,
    ExternalServiceException,
    EmailDeliveryException,
    MagicLinkException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    "async_session_maker",
    # Security
    "create_access_token",
    "decode_token",
    # Exceptions
    "APIException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    "InternalServerException",
    "InvalidTokenException",
    "UserNotFoundException",
    "WalletNotFoundException",
    "ApplicationNotFoundException",
    "JobNotFoundException",
    "ExternalServiceException",
    "EmailDeliveryException",
    "MagicLinkException",
]
