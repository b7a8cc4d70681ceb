from typing import Any, Dict, Optional

import httpx
from loguru import logger

from fantrax_setup.config.settings import settings
from fantrax_setup.errors import AuthenticationError, LeagueSetupError


class BaseScraper:
    """Base class for cookie-authenticated Fantrax page clients.

    Requests are made once; retry policy belongs to the caller. The session
    cookie travels on each request, so a client passed in by the caller is
    never modified.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        cookies: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        cookies = cookies if cookies is not None else settings.fantrax_cookies
        if not cookies:
            logger.error("Fantrax session cookie is not set in environment variables.")
            raise LeagueSetupError("Missing Fantrax cookie configuration.")

        self.headers = {"Cookie": cookies, "User-Agent": settings.user_agent}
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(timeout or settings.request_timeout),
            follow_redirects=False,
        )
        logger.debug(f"{type(self).__name__} initialized (cookie length: {len(cookies)}).")

    def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        content: Optional[bytes] = None,
        check_auth: bool = True,
        **kwargs,
    ) -> httpx.Response:
        """Makes a single HTTP request; transport errors propagate unchanged.

        With `check_auth`, 401 and 403 raise AuthenticationError. Callers that
        classify every status themselves pass check_auth=False.
        """
        logger.debug(f"Making {method} request to {url} (has_content={content is not None})")
        response = self.client.request(
            method,
            url,
            headers={**self.headers, **(headers or {})},
            params=params,
            content=content,
            follow_redirects=False,
            **kwargs,
        )

        if check_auth and response.status_code in {401, 403}:
            logger.warning(
                f"Authentication error ({response.status_code}) at {url}. Check credentials/cookies."
            )
            raise AuthenticationError(
                f"Authentication failed ({response.status_code})",
                status_code=response.status_code,
            )

        logger.debug(f"Request returned {response.status_code} for {url}")
        return response

    def close(self) -> None:
        """Closes the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self.client.close()
            logger.debug(f"Closed HTTP client for {type(self).__name__}")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
