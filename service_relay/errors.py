"""Exception types shared across service_relay."""

from __future__ import annotations


class TransportError(RuntimeError):
    """A fetch or send failed at the transport level.

    ``status_code`` is set when the remote side answered with a non-2xx
    status; it is ``None`` for connection-level failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
