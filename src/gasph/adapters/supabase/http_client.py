"""HTTP client for the Supabase REST (PostgREST) API."""

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import aiohttp

from gasph.adapters.api_request_logger import log_api_request
from gasph.adapters.config.app_config import AppConfig
from gasph.adapters.supabase.constants import DEFAULT_HEADERS, SINGLE_OBJECT_ACCEPT
from gasph.adapters.supabase.query import Query
from gasph.domain.errors import BackendError
from gasph.domain.models.error_details import ErrorDetails

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class SupabaseClient:
    """Generic data-access client for tables, views and RPC functions."""

    def __init__(
        self,
        config: AppConfig,
        session: "ClientSession",
        token_provider: Callable[[], str | None] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Application configuration with backend URL and key.
            session: Shared aiohttp session.
            token_provider: Returns the signed-in user's access token, if any.
        """
        self._config = config
        self._session = session
        self._token_provider = token_provider
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout_seconds)

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        """Build request headers, authorizing as the user when a token exists."""
        token = self._token_provider() if self._token_provider else None
        headers = dict(DEFAULT_HEADERS)
        headers["apikey"] = self._config.supabase_anon_key
        headers["Authorization"] = f"Bearer {token or self._config.supabase_anon_key}"
        if extra:
            headers.update(extra)
        return headers

    @staticmethod
    async def _raise_for_error(response: "ClientResponse", url: str) -> None:
        """Raise BackendError for non-2xx responses."""
        if 200 <= response.status < 300:
            return

        code: str | None = None
        reason = response.reason or f"HTTP {response.status}"
        text = await response.text()
        try:
            body = await response.json(content_type=None)
        except ValueError:
            body = None
        if isinstance(body, dict):
            code = body.get("code")
            reason = body.get("message") or reason
        elif text:
            reason = text[:200]

        logger.error(f"Backend returned status {response.status} for {url}: {code} {reason}")
        raise BackendError(ErrorDetails(status_code=response.status, code=code, reason=reason))

    @staticmethod
    async def _read_body(response: "ClientResponse") -> Any:
        """Decode a JSON body, or None when the response is empty."""
        text = await response.text()
        if not text:
            return None
        return await response.json(content_type=None)

    async def _request(
        self,
        method: str,
        path: str,
        params: list[tuple[str, str]] | None = None,
        payload: Any = None,
        extra_headers: dict[str, str] | None = None,
    ) -> tuple[Any, dict[str, str]]:
        """Send a request and return the decoded body and response headers."""
        url = f"{self._config.rest_url}/{path}"
        headers = self._headers(extra_headers)
        log_api_request(method, url, params=params, headers=headers, payload=payload)

        try:
            async with self._session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            ) as response:
                await self._raise_for_error(response, url)
                body = None if method == "HEAD" else await self._read_body(response)
                return body, dict(response.headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Error calling backend {method} {url}: {e}")
            raise BackendError(ErrorDetails(reason=f"Backend request failed: {e}")) from e

    async def select(self, query: Query) -> list[dict[str, Any]]:
        """Fetch all rows matching the query."""
        body, _ = await self._request("GET", query.table, params=query.to_params())
        if not isinstance(body, list):
            return []
        return body

    async def select_one(self, query: Query) -> dict[str, Any] | None:
        """Fetch exactly one row, or None when nothing matches."""
        try:
            body, _ = await self._request(
                "GET",
                query.table,
                params=query.to_params(),
                extra_headers={"Accept": SINGLE_OBJECT_ACCEPT},
            )
        except BackendError as e:
            if e.is_no_rows:
                return None
            raise
        return body if isinstance(body, dict) else None

    async def count(self, query: Query) -> int:
        """Exact number of rows matching the query."""
        _, headers = await self._request(
            "HEAD",
            query.table,
            params=query.to_params(),
            extra_headers={"Prefer": "count=exact"},
        )
        return self._parse_content_range(headers.get("Content-Range", ""))

    @staticmethod
    def _parse_content_range(content_range: str) -> int:
        """Extract the total from a Content-Range header such as '0-24/3573'."""
        _, _, total = content_range.partition("/")
        try:
            return int(total)
        except ValueError:
            return 0

    async def insert(
        self,
        table: str,
        rows: dict[str, Any] | list[dict[str, Any]],
        returning: bool = False,
    ) -> list[dict[str, Any]]:
        """Insert one or more rows, optionally returning the stored representation."""
        prefer = "return=representation" if returning else "return=minimal"
        body, _ = await self._request(
            "POST", table, payload=rows, extra_headers={"Prefer": prefer}
        )
        if isinstance(body, dict):
            return [body]
        return body or []

    async def update(self, query: Query, values: dict[str, Any]) -> None:
        """Update the rows matched by the query's filters."""
        await self._request(
            "PATCH",
            query.table,
            params=query.filter_params(),
            payload=values,
            extra_headers={"Prefer": "return=minimal"},
        )

    async def delete(self, query: Query) -> None:
        """Delete the rows matched by the query's filters."""
        await self._request(
            "DELETE",
            query.table,
            params=query.filter_params(),
            extra_headers={"Prefer": "return=minimal"},
        )

    async def rpc(self, function: str, params: dict[str, Any]) -> Any:
        """Call a backend RPC function."""
        body, _ = await self._request("POST", f"rpc/{function}", payload=params)
        return body
