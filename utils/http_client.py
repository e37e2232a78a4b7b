"""
Upstream client utilities with connection pooling.
Provides a shared OpenAI client backed by a pooled httpx transport.
"""
import httpx
from openai import AsyncOpenAI

from config import Config
from utils.constants import ErrorMessages
from utils.exceptions import UpstreamError


class UpstreamClientManager:
    """Manages the shared httpx transport and the OpenAI client built on it."""

    _http_client: httpx.AsyncClient | None = None
    _openai_client: AsyncOpenAI | None = None

    @classmethod
    def get_http_client(cls) -> httpx.AsyncClient:
        """
        Get or create the shared httpx client used for upstream calls.

        Features:
        - Connection pooling (reuses TCP connections)
        - Timeout aligned with the completion timeout

        Returns:
            Configured httpx.AsyncClient
        """
        if cls._http_client is None:
            limits = httpx.Limits(
                max_connections=Config.MAX_UPSTREAM_CONNECTIONS,
                max_keepalive_connections=Config.MAX_KEEPALIVE_CONNECTIONS,
                keepalive_expiry=30.0
            )

            cls._http_client = httpx.AsyncClient(
                timeout=Config.UPSTREAM_TIMEOUT,
                limits=limits
            )

        return cls._http_client

    @classmethod
    def get_client(cls) -> AsyncOpenAI:
        """
        Get or create the shared OpenAI client.

        The API key is only checked here, at call time, so the server can start
        and serve conversation sync without one.

        Raises:
            UpstreamError: If OPENAI_API_KEY is not configured
        """
        if not Config.OPENAI_API_KEY:
            raise UpstreamError(ErrorMessages.UPSTREAM_FAILURE, ErrorMessages.UPSTREAM_NOT_CONFIGURED)

        if cls._openai_client is None:
            cls._openai_client = AsyncOpenAI(
                api_key=Config.OPENAI_API_KEY,
                http_client=cls.get_http_client(),
                timeout=Config.UPSTREAM_TIMEOUT,
                max_retries=0
            )

        return cls._openai_client

    @classmethod
    async def close_all(cls) -> None:
        """
        Close all managed clients and clean up connections.
        """
        if cls._openai_client is not None:
            await cls._openai_client.close()
            cls._openai_client = None

        if cls._http_client is not None:
            await cls._http_client.aclose()
            cls._http_client = None
