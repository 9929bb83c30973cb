"""Services d'accès au backend."""

from userdesk.services.users_client import (
    ErrorKind,
    IpInfo,
    ServerError,
    UserRecord,
    UsersService,
    UsersServiceError,
)

__all__ = [
    "ErrorKind",
    "IpInfo",
    "ServerError",
    "UserRecord",
    "UsersService",
    "UsersServiceError",
]
