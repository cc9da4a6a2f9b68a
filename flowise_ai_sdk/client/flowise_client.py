"""
HTTP client for the Flowise REST API.

Wraps an httpx.AsyncClient with the Flowise base URL and bearer
authentication. ``fetch_with_auth`` is the authenticated-fetch capability
handed to the upload config resolver and the attachment extractor; it
returns responses unchecked so those callers can degrade on failure.
"""

from typing import Any, AsyncIterator, Dict, Optional

import httpx

from ..config.constants import (
    CHATFLOW_PATH,
    CHATFLOW_STREAMING_PATH,
    PREDICTION_PATH,
)
from ..config.settings import FlowiseClientOptions
from ..models.generation import PredictionRequest, PredictionResponse
from ..observability.logging import Logger, get_logger
from ..providers.errors import API_ERROR_PREFIX, STREAMING_ERROR_PREFIX, ErrorMapper
from ..streaming.sse import iter_sse_events


class ResponseEventStream:
    """Event records of one streaming response. ``aclose`` always closes the response."""

    def __init__(self, response: httpx.Response, events: AsyncIterator[Dict[str, Any]]):
        self.response = response
        self._events = events

    def __aiter__(self) -> "ResponseEventStream":
        return self

    async def __anext__(self) -> Dict[str, Any]:
        return await self._events.__anext__()

    async def aclose(self) -> None:
        try:
            await self._events.aclose()
        finally:
            await self.response.aclose()


class FlowiseClient:
    """Async client for a Flowise server."""

    def __init__(
        self,
        options: Optional[FlowiseClientOptions] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the client.

        Args:
            options: Connection options; read from the environment if omitted
            http_client: Optional pre-built httpx client (not closed by aclose)
            logger: Logger; defaults to the process-wide SDK logger
        """
        self.options = options or FlowiseClientOptions.from_env()
        self.logger = logger or get_logger()
        self._owns_client = http_client is None
        self._client: Optional[httpx.AsyncClient] = http_client

    @property
    def base_url(self) -> str:
        return self.options.base_url

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy initialization of the httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.options.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FlowiseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _resolve_url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        if path.startswith("/"):
            return f"{self.base_url}{path}"
        return f"{self.base_url}/{path}"

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = dict(extra or {})
        if self.options.api_key:
            headers["Authorization"] = f"Bearer {self.options.api_key}"
        return headers

    async def fetch_with_auth(self, path: str, method: str = "GET", **kwargs: Any) -> httpx.Response:
        """
        Send an authenticated request to the Flowise server.

        Relative paths are resolved against the base URL. The response is
        returned without a status check; transport errors propagate.
        """
        headers = self._headers(kwargs.pop("headers", None))
        return await self.http_client.request(method, self._resolve_url(path), headers=headers, **kwargs)

    async def fetch_remote_file(self, url: str) -> httpx.Response:
        """Download a remote attachment. No Flowise credentials are sent."""
        return await self.http_client.get(url, follow_redirects=True)

    async def _get_json(self, path: str) -> Any:
        try:
            response = await self.fetch_with_auth(path, headers={"Content-Type": "application/json"})
        except httpx.HTTPError as e:
            raise ErrorMapper.map_flowise_error(e, API_ERROR_PREFIX) from e
        if not response.is_success:
            raise ErrorMapper.from_response(response, API_ERROR_PREFIX)
        return response.json()

    async def predict(self, chatflow_id: str, request: PredictionRequest) -> PredictionResponse:
        """Run a non-streaming prediction."""
        payload = request.model_copy(update={"streaming": False}).to_payload()
        try:
            response = await self.fetch_with_auth(
                PREDICTION_PATH.format(chatflow_id=chatflow_id),
                method="POST",
                json=payload,
            )
        except httpx.HTTPError as e:
            raise ErrorMapper.map_flowise_error(e, API_ERROR_PREFIX) from e
        if not response.is_success:
            raise ErrorMapper.from_response(response, API_ERROR_PREFIX)
        try:
            return PredictionResponse.model_validate(response.json())
        except ValueError as e:
            raise ErrorMapper.map_flowise_error(e, API_ERROR_PREFIX) from e

    async def predict_stream(
        self, chatflow_id: str, request: PredictionRequest
    ) -> ResponseEventStream:
        """
        Start a streaming prediction.

        The HTTP status is checked before this coroutine returns, so
        transport failures raise here rather than mid-stream. The returned
        stream yields decoded event records and closes the response on every
        exit path, including ``aclose()`` before the first record.
        """
        payload = request.model_copy(update={"streaming": True}).to_payload()
        http_request = self.http_client.build_request(
            "POST",
            self._resolve_url(PREDICTION_PATH.format(chatflow_id=chatflow_id)),
            json=payload,
            headers=self._headers({
                "Accept": "text/event-stream",
                "Cache-Control": "no-cache",
            }),
        )
        try:
            response = await self.http_client.send(http_request, stream=True)
        except httpx.HTTPError as e:
            raise ErrorMapper.map_flowise_error(e, STREAMING_ERROR_PREFIX) from e

        if not response.is_success:
            try:
                await response.aread()
                raise ErrorMapper.from_response(response, STREAMING_ERROR_PREFIX)
            finally:
                await response.aclose()

        return ResponseEventStream(response, self._iter_events(response))

    async def _iter_events(self, response: httpx.Response) -> AsyncIterator[Dict[str, Any]]:
        try:
            async for event in iter_sse_events(response.aiter_lines(), self.logger):
                yield event
        except httpx.HTTPError as e:
            raise ErrorMapper.map_flowise_error(e, STREAMING_ERROR_PREFIX) from e
        finally:
            await response.aclose()

    async def get_chatflow(self, chatflow_id: str) -> Dict[str, Any]:
        """Fetch the chatflow definition."""
        return await self._get_json(CHATFLOW_PATH.format(chatflow_id=chatflow_id))

    async def check_chatflow_streaming(self, chatflow_id: str) -> Dict[str, Any]:
        """Ask Flowise whether the chatflow supports streaming."""
        return await self._get_json(CHATFLOW_STREAMING_PATH.format(chatflow_id=chatflow_id))
