"""Shared HTTP client for JSON APIs."""

from typing import Optional, Dict, Any
import requests


class HTTPClient:
    """Thin wrapper over a ``requests.Session`` for JSON GET requests.

    Each call is a single request: failures are raised to the caller and never
    retried.

    Args:
        timeout: Request timeout in seconds (default: 15)
        session: Optional pre-built session (tests inject fakes here)
        user_agent: Optional User-Agent header sent with every request
    """

    def __init__(
        self,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
        user_agent: str = "spacetraveling/0.1",
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {"Accept": "application/json", "User-Agent": user_agent}

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """GET *url* and decode the JSON body.

        Args:
            url: URL to fetch
            params: Optional query parameters (``None`` values are dropped)
            timeout: Optional timeout override (uses instance default if None)

        Returns:
            Decoded JSON payload

        Raises:
            requests.HTTPError: On non-2xx responses
            requests.RequestException: On network errors
        """
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        r = self.session.get(
            url,
            headers=self.headers,
            params=clean_params,
            timeout=timeout or self.timeout,
        )
        r.raise_for_status()
        return r.json()

    def close(self):
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
