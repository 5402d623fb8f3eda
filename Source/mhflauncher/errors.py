"""Exception types raised by the launcher core.

Transport errors are recoverable: their message ends up in the single
last-error slot shown to the user. Stall and launch errors are not; they
propagate out of the controller and end the process.
"""

from __future__ import annotations


class LauncherError(Exception):
    """Base class for all launcher errors."""


class TransportError(LauncherError):
    """A request did not produce usable data."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DecodeError(TransportError):
    """Response body was not the JSON shape the caller expected."""

    def __init__(self, detail: object):
        super().__init__(f"Failed to decode JSON response: {detail}")
        self.detail = detail


class ServerError(TransportError):
    """Server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class ConnectionFailure(TransportError):
    """No response was received at all."""


class InvalidStateError(LauncherError):
    """Operation is not available in the controller's current state."""


class UnknownStallError(LauncherError):
    """Server sent a stall code outside the known set (incompatible protocol)."""

    def __init__(self, code: int):
        super().__init__(f"Unknown MezFes stall code: {code}")
        self.code = code


class LaunchError(LauncherError):
    """The external runtime could not take over."""
