"""Shared HTTP transport built on a requests session.

One HttpClient is created per run and handed to every pipeline component,
so tests can substitute the transport without touching global state.
Nothing here retries: a failed request surfaces as TransportError at once.
"""

from typing import Any, Dict, Iterator, Optional

import requests
import structlog

from dashdl.core.config import DEFAULT_USER_AGENT, HttpConfig
from dashdl.core.logging import redact_url
from dashdl.exceptions import InvalidFormatError, TransportError

logger = structlog.get_logger(__name__)


class HttpClient:
    """Thin blocking GET client over requests.Session."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_tls: bool = True,
    ):
        """
        Initialize the client.

        Args:
            session: Session to use, a new one is created if None
            timeout: Per-request timeout in seconds, None for the transport default
            user_agent: User-Agent header sent with every request
            verify_tls: Whether TLS certificates are verified
        """
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.session.verify = verify_tls
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: HttpConfig) -> "HttpClient":
        return cls(
            timeout=config.timeout,
            user_agent=config.user_agent,
            verify_tls=config.verify_tls,
        )

    def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        stream: bool = False,
        stage: Optional[str] = None,
    ) -> requests.Response:
        """
        Issue a GET request and check its status.

        Args:
            url: Absolute URL to fetch
            headers: Extra request headers
            stream: Defer body download for iteration
            stage: Pipeline stage name attached to raised errors

        Returns:
            Response with a 2xx status

        Raises:
            TransportError: On connection failure, timeout or non-success status
        """
        logger.debug("http_get", url=redact_url(url), stream=stream, stage=stage)
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout, stream=stream)
        except requests.RequestException as e:
            raise TransportError(
                f"Request to {redact_url(url)} failed: {e}", url=url, stage=stage
            ) from e

        if not response.ok:
            status_code = response.status_code
            response.close()
            raise TransportError(
                f"HTTP {status_code} from {redact_url(url)}",
                url=url,
                status_code=status_code,
                stage=stage,
            )
        return response

    def get_text(
        self, url: str, headers: Optional[Dict[str, str]] = None, stage: Optional[str] = None
    ) -> str:
        """Fetch a URL and return its body decoded as text."""
        response = self.get(url, headers=headers, stage=stage)
        try:
            return response.text
        except requests.RequestException as e:
            raise TransportError(
                f"Reading body of {redact_url(url)} failed: {e}", url=url, stage=stage
            ) from e

    def get_json(
        self, url: str, headers: Optional[Dict[str, str]] = None, stage: Optional[str] = None
    ) -> Any:
        """
        Fetch a URL and parse its body as JSON.

        Raises:
            TransportError: If the request fails
            InvalidFormatError: If the body is not valid JSON
        """
        response = self.get(url, headers=headers, stage=stage)
        try:
            return response.json()
        except ValueError as e:
            raise InvalidFormatError(
                f"Response from {redact_url(url)} is not valid JSON: {e}", stage=stage
            ) from e
        except requests.RequestException as e:
            raise TransportError(
                f"Reading body of {redact_url(url)} failed: {e}", url=url, stage=stage
            ) from e

    def iter_content(
        self, url: str, chunk_size: int = 65536, stage: Optional[str] = None
    ) -> Iterator[bytes]:
        """
        Stream a response body in chunks.

        The connection is released when iteration ends or the generator is closed.

        Raises:
            TransportError: If the request fails or the stream breaks midway
        """
        response = self.get(url, stream=True, stage=stage)
        with response:
            try:
                for chunk in response.iter_content(chunk_size=chunk_size):
                    if chunk:
                        yield chunk
            except requests.RequestException as e:
                raise TransportError(
                    f"Stream from {redact_url(url)} broke: {e}", url=url, stage=stage
                ) from e

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
