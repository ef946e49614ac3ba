"""
Prismic REST API (v2) client.

Only the two operations the page build needs are implemented: a predicate
query against ``/documents/search`` and a UID point lookup built on top of
it. Every search is pinned to the repository's master ref, which is fetched
once from the API root and reused for the lifetime of the client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .http_client import HTTPClient
from .predicates import at, build_query


logger = logging.getLogger(__name__)


class DocumentNotFoundError(LookupError):
    """Raised when a UID lookup matches no document."""

    def __init__(self, document_type: str, uid: str):
        super().__init__(f"No '{document_type}' document with uid '{uid}'")
        self.document_type = document_type
        self.uid = uid


class PrismicClient:
    """Client for a single Prismic repository.

    Args:
        api_endpoint: Repository API root, e.g. ``https://repo.cdn.prismic.io/api/v2``
        access_token: Optional access token for private repositories
        http: Optional HTTP client (a fresh ``HTTPClient`` is created if None)
    """

    def __init__(
        self,
        api_endpoint: str,
        access_token: Optional[str] = None,
        http: Optional[HTTPClient] = None,
    ):
        self.api_endpoint = api_endpoint.rstrip('/')
        self.access_token = access_token
        self.http = http or HTTPClient()
        self._master_ref: Optional[str] = None

    @property
    def search_url(self) -> str:
        return f"{self.api_endpoint}/documents/search"

    def master_ref(self) -> str:
        """Return the master ref, fetching the API root on first use."""
        if self._master_ref is None:
            api = self.http.get_json(self.api_endpoint, params={'access_token': self.access_token})
            refs = api.get('refs') or []
            master = next((r for r in refs if r.get('isMasterRef')), None)
            if master is None or not master.get('ref'):
                raise ValueError(f"Prismic API at {self.api_endpoint} returned no master ref")
            self._master_ref = master['ref']
            logger.debug("Using master ref %s", self._master_ref)
        return self._master_ref

    def query(self, predicates: List[str], options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a predicate query and return one page of the search response.

        Args:
            predicates: Predicate strings, see :mod:`spacetraveling.core.predicates`
            options: Optional ``fetch`` (list of ``type.field``), ``pageSize``,
                ``page``, ``orderings`` and ``lang`` settings

        Returns:
            The raw search payload (``results``, ``page``, ``total_pages``, ...)
        """
        options = options or {}
        fetch = options.get('fetch')
        if isinstance(fetch, (list, tuple)):
            fetch = ','.join(fetch)

        params = {
            'ref': options.get('ref') or self.master_ref(),
            'q': build_query(predicates),
            'fetch': fetch,
            'pageSize': options.get('pageSize'),
            'page': options.get('page'),
            'orderings': options.get('orderings'),
            'lang': options.get('lang'),
            'access_token': self.access_token,
        }
        logger.debug("Querying %s with q=%s", self.search_url, params['q'])
        return self.http.get_json(self.search_url, params=params)

    def get_by_uid(self, document_type: str, uid: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Return the single document of *document_type* whose UID is *uid*.

        Raises:
            DocumentNotFoundError: If no document matches
        """
        lookup_options = dict(options or {})
        lookup_options.update({'pageSize': 1, 'page': 1})
        response = self.query([at(f"my.{document_type}.uid", uid)], lookup_options)
        results = response.get('results') or []
        if not results:
            raise DocumentNotFoundError(document_type, uid)
        return results[0]

    def close(self):
        """Close the underlying HTTP session."""
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
