from app.exceptions.custom_exceptions import (
    CrewCenterException,
    NetworkFeedException,
    MalformedFeedException,
    PersistenceException,
    AuthenticationException
)

__all__ = [
    "CrewCenterException",
    "NetworkFeedException",
    "MalformedFeedException",
    "PersistenceException",
    "AuthenticationException"
]
