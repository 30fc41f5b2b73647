"""Streaming relay: resolve a short code and pass the upstream response through."""

import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, Optional

import httpx

from .errors import (
    ValidationError,
    NotFoundError,
    InvalidTargetError,
    UpstreamUnavailableError,
    UpstreamStatusError,
)
from .store.base import MappingStore
from .store.models import InvalidRecordError


DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ProxyLink/1.0)"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Upstream headers copied to the client when present
PASSTHROUGH_HEADERS = ("Content-Length", "Accept-Ranges", "Content-Range")

# Set on every relayed response regardless of upstream
FIXED_HEADERS = {
    "Cache-Control": "no-store",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Range",
}


@dataclass
class RelayedResponse:
    """Transport-independent view of a response being relayed.

    ``body`` is a one-shot async iterator over upstream chunks. Closing it
    (or calling ``aclose``) releases the upstream connection.
    """

    status_code: int
    headers: Dict[str, str]
    body: AsyncIterator[bytes]
    upstream: Optional[httpx.Response] = field(default=None, repr=False)

    async def aclose(self) -> None:
        if self.upstream is not None:
            await self.upstream.aclose()


class ProxyRelay:
    """Fetches the target of a short code and streams it back."""

    def __init__(
        self,
        store: MappingStore,
        http_client: httpx.AsyncClient,
        logger: Optional[logging.Logger] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """Initialize relay.

        Args:
            store: Mapping store
            http_client: Shared client used for upstream requests; its
                timeouts bound every upstream fetch
            logger: Optional logger
            user_agent: User-Agent sent upstream
        """
        self.store = store
        self.http_client = http_client
        self.logger = logger or logging.getLogger(__name__)
        self.user_agent = user_agent

    async def relay(self, code: str, range_header: Optional[str] = None) -> RelayedResponse:
        """Resolve a code and open a streaming upstream response.

        Exactly one upstream attempt is made; nothing is retried.

        Args:
            code: The short code
            range_header: Inbound Range header value, forwarded verbatim

        Returns:
            RelayedResponse whose body streams the upstream body

        Raises:
            ValidationError: Empty code
            NotFoundError: Unknown code
            InvalidTargetError: Stored record or target URL fails validation
            UpstreamUnavailableError: Network/transport failure
            UpstreamStatusError: Upstream answered with a non-2xx status
        """
        if not code:
            raise ValidationError("Missing code")

        try:
            record = await self.store.get(code)
        except InvalidRecordError as e:
            self.logger.warning(f"Rejecting malformed record: {e}")
            raise InvalidTargetError()

        if record is None:
            raise NotFoundError()

        # Stored data is re-checked before it is fetched
        if not record.has_valid_target:
            self.logger.warning(f"Rejecting stored target for {code}: {record.target_url}")
            raise InvalidTargetError()

        # A target can pass the scheme check and still be unparseable (bad
        # host, port or characters); that fails like any other fetch.
        try:
            request = self.http_client.build_request(
                "GET",
                record.target_url,
                headers=self._upstream_headers(range_header),
            )
            upstream = await self.http_client.send(request, stream=True, follow_redirects=True)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            self.logger.warning(f"Upstream fetch failed for {code} ({record.target_url}): {e!r}")
            raise UpstreamUnavailableError()

        if not upstream.is_success:
            await upstream.aclose()
            self.logger.warning(f"Upstream {record.target_url} answered {upstream.status_code}")
            raise UpstreamStatusError(upstream.status_code)

        self.logger.debug(f"Relaying {code} -> {record.target_url} ({upstream.status_code})")

        return RelayedResponse(
            status_code=upstream.status_code,
            headers=self._response_headers(upstream.headers),
            body=self._stream_body(upstream),
            upstream=upstream,
        )

    def _upstream_headers(self, range_header: Optional[str]) -> Dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            # Keep bytes on the wire as-is so Content-Length stays accurate
            "Accept-Encoding": "identity",
        }
        if range_header:
            headers["Range"] = range_header
        return headers

    @staticmethod
    def _response_headers(upstream_headers: httpx.Headers) -> Dict[str, str]:
        headers = {"Content-Type": upstream_headers.get("content-type") or DEFAULT_CONTENT_TYPE}
        for name in PASSTHROUGH_HEADERS:
            value = upstream_headers.get(name)
            if value:
                headers[name] = value
        headers.update(FIXED_HEADERS)
        return headers

    async def _stream_body(self, upstream: httpx.Response) -> AsyncIterator[bytes]:
        # Closing the generator (client went away) closes the upstream response
        try:
            async for chunk in upstream.aiter_raw():
                yield chunk
        except httpx.HTTPError as e:
            self.logger.warning(f"Upstream stream interrupted for {upstream.request.url}: {e!r}")
            raise
        finally:
            await upstream.aclose()
