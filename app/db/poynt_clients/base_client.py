"""
Base Poynt REST transport.

This module provides the request descriptor built by the Poynt clients and
the default executor that performs the HTTP call, including session
management, authentication headers and error mapping.
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

import aiohttp
from aiohttp import ClientTimeout

from app.core.config import Settings, get_settings
from app.core.logging_config import log_api_call
from app.utils.error_handler import PoyntAPIException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Outbound request prior to transport.

    Attributes:
        url: Relative path starting with /businesses/..., query included
        method: HTTP verb
        body: Payload serialized by the executor, if any
    """

    url: str
    method: str = "GET"
    body: Optional[Any] = None


RequestExecutor = Callable[[RequestDescriptor], Awaitable[Any]]


class PoyntRequestExecutor:
    """
    Default executor for Poynt REST API requests.

    Owns the HTTP session; clients receive its `request` coroutine.
    """

    def __init__(self, settings: Optional[Settings] = None, access_token: Optional[str] = None):
        """Initialize the executor from settings."""
        self.settings = settings or get_settings()
        self.base_url = self.settings.POYNT_API_URL
        self.access_token = access_token or self.settings.POYNT_ACCESS_TOKEN
        self.session: Optional[aiohttp.ClientSession] = None

        logger.info(f"Initialized Poynt executor for {self.base_url}")

    async def initialize(self):
        """
        Create the HTTP session.

        Raises:
            PoyntAPIException: If the session cannot be created
        """
        try:
            timeout = ClientTimeout(
                total=self.settings.POYNT_REQUEST_TIMEOUT,
                connect=self.settings.POYNT_CONNECT_TIMEOUT,
            )
            self.session = aiohttp.ClientSession(timeout=timeout, headers=self._default_headers())
            logger.info("✅ Poynt executor initialized successfully")

        except Exception as e:
            logger.error(f"❌ Failed to initialize Poynt executor: {e}")
            raise PoyntAPIException(f"Executor initialization failed: {str(e)}") from e

    async def close(self):
        """Close the HTTP session and clean up resources."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info("Poynt executor closed")

    async def __aenter__(self) -> "PoyntRequestExecutor":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _default_headers(self) -> Dict[str, str]:
        headers = self.settings.get_poynt_headers()
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def build_url(self, descriptor: RequestDescriptor) -> str:
        """Absolute URL for a descriptor."""
        return f"{self.base_url}{descriptor.url}"

    async def request(self, descriptor: RequestDescriptor) -> Any:
        """
        Perform the HTTP call described by `descriptor`.

        Args:
            descriptor: Request to send

        Returns:
            Parsed JSON response, or None for an empty body

        Raises:
            PoyntAPIException: On HTTP errors, rate limiting or network failures
        """
        if not self.session:
            raise PoyntAPIException("Executor not initialized. Call initialize() first.")

        url = self.build_url(descriptor)
        request_id = str(uuid.uuid4())
        kwargs: Dict[str, Any] = {"headers": {"Poynt-Request-Id": request_id}}
        if descriptor.body is not None:
            kwargs["json"] = descriptor.body

        start = time.time()
        try:
            async with self.session.request(descriptor.method, url, **kwargs) as response:
                text = await response.text()
                duration = time.time() - start
                log_api_call(descriptor.method, descriptor.url, response.status, duration, request_id=request_id)

                data = self._parse_body(text)

                if response.status == 429:
                    retry_after = int(response.headers.get("Retry-After", 1))
                    raise PoyntAPIException(
                        f"Rate limit exceeded on {descriptor.method} {descriptor.url}",
                        api_response_code=429,
                        endpoint=descriptor.url,
                        method=descriptor.method,
                        rate_limited=True,
                        retry_after=retry_after,
                        response_body=data,
                    )

                if response.status >= 400:
                    raise PoyntAPIException(
                        f"HTTP {response.status}: {self._error_message(data)}",
                        api_response_code=response.status,
                        endpoint=descriptor.url,
                        method=descriptor.method,
                        response_body=data,
                    )

                return data

        except aiohttp.ClientError as e:
            logger.error(f"Network error on {descriptor.method} {descriptor.url}: {e}")
            raise PoyntAPIException(
                f"Network error: {str(e)}",
                endpoint=descriptor.url,
                method=descriptor.method,
            ) from e

    @staticmethod
    def _parse_body(text: str) -> Any:
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text

    @staticmethod
    def _error_message(data: Any) -> str:
        if isinstance(data, dict):
            return data.get("message") or data.get("developerMessage") or data.get("error") or "Unknown error"
        return str(data) if data else "Unknown error"

    def __str__(self):
        """String representation of the executor."""
        return f"PoyntRequestExecutor(base_url={self.base_url})"

    def __repr__(self):
        """Detailed string representation of the executor."""
        return (
            f"PoyntRequestExecutor("
            f"base_url='{self.base_url}', "
            f"api_version='{self.settings.POYNT_API_VERSION}', "
            f"initialized={self.session is not None})"
        )
