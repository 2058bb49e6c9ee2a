"""
Clients for the third-party quote and joke services.

Both services are treated as opaque string sources. Any failure (network
error, timeout, non-2xx status, unexpected body) is logged and replaced
with a fixed fallback string, so an outage never blocks employee creation.
"""

import contextvars
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

import requests

from src.employees.errors import ExternalServiceDegraded
from src.observability.logger import get_logger
from src.observability.metrics import (
    external_call_duration_seconds,
    external_fallbacks_total,
    track_duration,
)

logger = get_logger(__name__)

DEFAULT_QUOTE_API_URL = "https://ron-swanson-quotes.herokuapp.com/v2/quotes"
DEFAULT_JOKE_API_URL = "https://icanhazdadjoke.com/"

QUOTE_FALLBACK = "No quote found :("
JOKE_FALLBACK = "No joke found :("


def parse_quote(data: Any) -> str:
    """Quote service body: a JSON array whose first element is the quote."""
    if isinstance(data, list) and data and isinstance(data[0], str):
        return data[0]
    raise ExternalServiceDegraded("quote", "expected a non-empty array of strings")


def parse_joke(data: Any) -> str:
    """Joke service body: a JSON object with a string ``joke``."""
    if isinstance(data, dict) and isinstance(data.get("joke"), str):
        return data["joke"]
    raise ExternalServiceDegraded("joke", "expected an object with a string 'joke'")


class ExternalContentClient:
    """
    Fetches the quote and joke attached to new employees.

    Example usage:
        client = ExternalContentClient(timeout=2.0)
        quote, joke = client.fetch_all()
    """

    def __init__(
        self,
        quote_url: str | None = None,
        joke_url: str | None = None,
        timeout: float | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        """
        Initialize the client.

        Args:
            quote_url: Quote endpoint (defaults to env var QUOTE_API_URL)
            joke_url: Joke endpoint (defaults to env var JOKE_API_URL)
            timeout: Per-call timeout in seconds (defaults to env var EXTERNAL_API_TIMEOUT)
            session_factory: Builds the session for each call; sessions are
                not shared between the concurrent fetches
        """
        self.quote_url = quote_url or os.getenv("QUOTE_API_URL", DEFAULT_QUOTE_API_URL)
        self.joke_url = joke_url or os.getenv("JOKE_API_URL", DEFAULT_JOKE_API_URL)
        self.timeout = timeout or float(os.getenv("EXTERNAL_API_TIMEOUT", "3.0"))
        self.session_factory = session_factory

    def fetch_quote(self) -> str:
        return self._fetch("quote", self.quote_url, parse_quote, QUOTE_FALLBACK)

    def fetch_joke(self) -> str:
        return self._fetch(
            "joke",
            self.joke_url,
            parse_joke,
            JOKE_FALLBACK,
            headers={"Accept": "application/json"},
        )

    def fetch_all(self) -> tuple[str, str]:
        """
        Fetch the quote and the joke concurrently.

        Returns only after both calls have finished or fallen back.
        """
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="content") as pool:
            # Each task runs in its own copy of the request log context
            quote = pool.submit(contextvars.copy_context().run, self.fetch_quote)
            joke = pool.submit(contextvars.copy_context().run, self.fetch_joke)
            return quote.result(), joke.result()

    def _fetch(
        self,
        service: str,
        url: str,
        parser: Callable[[Any], str],
        fallback: str,
        headers: dict[str, str] | None = None,
    ) -> str:
        """GET ``url`` and parse it, returning ``fallback`` on any failure."""
        try:
            with self.session_factory() as session, track_duration(external_call_duration_seconds, service=service):
                response = session.get(url, headers=headers, timeout=self.timeout)
                if not 200 <= response.status_code < 300:
                    raise ExternalServiceDegraded(service, f"HTTP {response.status_code}")
                return parser(response.json())
        except (requests.RequestException, ValueError, ExternalServiceDegraded) as e:
            logger.warning(
                f"{service} service unavailable, using fallback",
                extra={"service": service, "url": url, "error_type": type(e).__name__, "error_message": str(e)},
            )
            external_fallbacks_total.labels(service=service).inc()
            return fallback
