"""Request context for log correlation.

Holds the request ID and the authenticated owner ID in context variables so
they propagate across awaits and into worker threads started with
asyncio.to_thread.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
owner_id_var: ContextVar[Optional[str]] = ContextVar("owner_id", default=None)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_owner_id() -> Optional[str]:
    return owner_id_var.get()


def set_owner_id(owner_id: Optional[str]) -> None:
    owner_id_var.set(owner_id)
