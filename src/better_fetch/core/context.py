"""Request/response contexts passed to lifecycle hooks."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional
import uuid

if TYPE_CHECKING:
    from .abort import AbortController
    from .options import FetchOptions
    from .response import FetchResponse


@dataclass
class RequestContext:
    """Realized outbound request of one attempt.

    Attributes:
        url: Final URL (base_url + url + query)
        method: HTTP method
        headers: Header set (mutable; changes reach the transport)
        body: Encoded request body
        controller: AbortController of this attempt
        options: Finalized FetchOptions that produced the request
        attempt: Attempt number, 0 for the initial request
        request_id: Unique identifier of the attempt

    Example:
        >>> async def on_request(ctx: RequestContext):
        ...     ctx.headers["X-Request-Id"] = ctx.request_id
    """

    url: str
    method: str
    headers: Any
    body: Any
    controller: "AbortController"
    options: "FetchOptions"
    attempt: int = 0
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def signal(self):
        return self.options.signal


@dataclass
class ResponseContext:
    """Transport response of one attempt, with the request that produced it."""

    response: "FetchResponse"
    request: Optional[RequestContext] = None

    @property
    def attempt(self) -> int:
        return self.request.attempt if self.request is not None else 0
