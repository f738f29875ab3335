import logging

import httpx

logger = logging.getLogger(__name__)


class HttpClientFactory:
    """
    HTTP Client Factory for the Runtime API connection.

    The Runtime API is plain HTTP on a link-local endpoint and the next-event
    request is a long poll, so clients are built without a timeout.
    """

    def create_async_client(self, **kwargs) -> httpx.AsyncClient:
        """
        Create an httpx.AsyncClient for the Runtime API.

        Args:
            **kwargs: Additional arguments for httpx.AsyncClient
        """
        kwargs.setdefault("timeout", httpx.Timeout(None))
        # A single reusable connection is enough: one invocation at a time.
        if "limits" not in kwargs:
            kwargs["limits"] = httpx.Limits(max_keepalive_connections=1, max_connections=1)
        # Avoid leaking host HTTP(S)_PROXY/NO_PROXY into Runtime API calls.
        kwargs.setdefault("trust_env", False)

        logger.debug("Creating Runtime API client", extra={"client_options": sorted(kwargs)})
        return httpx.AsyncClient(**kwargs)
