"""Network clients for the transmission relay server."""

from transmission_relay.exceptions import (
    APIError,
    ClientError,
    NetworkFailure,
    NotFoundError,
    UnexpectedShape,
)

from .client import Client
from .relay_client import RelayClient

__all__ = [
    "Client",
    "RelayClient",
    "ClientError",
    "NetworkFailure",
    "APIError",
    "NotFoundError",
    "UnexpectedShape",
]
