"""Cooperative cancellation for object storage transfers.

Transfers run in worker threads, so the flag is a threading.Event that the
adapter polls from its progress callback.
"""

import threading


class TransferCancelled(Exception):
    """Raised inside a transfer once its token has been cancelled."""
    pass


class CancellationToken:
    """Shared flag between the upload workflow and a running transfer."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise TransferCancelled("Transfer cancelled")
