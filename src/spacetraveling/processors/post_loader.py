"""
Build-time data hooks for post pages.

``get_static_paths`` enumerates every ``post`` document as a page path and
``get_static_props`` loads one post for rendering. Both take the content
source client as an explicit argument.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from ..core.models import Post
from ..core.predicates import at
from ..core.prismic_client import PrismicClient

logger = logging.getLogger(__name__)

POST_TYPE = 'post'
PATH_FETCH_FIELDS = ['post.title', 'post.subtitle', 'post.author', 'post.content']


def list_post_uids(client: PrismicClient, page_size: int = 100) -> List[str]:
    """Return the UIDs of all ``post`` documents in CMS order.

    Follows result pages until ``total_pages`` is exhausted.
    """
    uids: List[str] = []
    page = 1
    while True:
        response = client.query(
            [at('document.type', POST_TYPE)],
            {'fetch': PATH_FETCH_FIELDS, 'pageSize': page_size, 'page': page},
        )
        for document in response.get('results') or []:
            uid = document.get('uid')
            if uid:
                uids.append(uid)
            else:
                logger.warning("Skipping post document without uid (id=%s)", document.get('id'))

        total_pages = response.get('total_pages') or 1
        if page >= total_pages:
            break
        page += 1

    logger.info(f"Found {len(uids)} post paths")
    return uids


def get_static_paths(client: PrismicClient, page_size: int = 100) -> Dict[str, Any]:
    """Return precomputed page paths with on-demand generation enabled."""
    paths = [{'params': {'slug': uid}} for uid in list_post_uids(client, page_size=page_size)]
    return {'paths': paths, 'fallback': True}


def load_post(client: PrismicClient, slug: str) -> Post:
    """Fetch the post whose UID is *slug* and decode it for display.

    Raises:
        DocumentNotFoundError: If no post has this UID
        DecodeError: If the document lacks a field the page needs
    """
    document = client.get_by_uid(POST_TYPE, str(slug), {})
    post = Post.from_document(document)
    logger.debug("Loaded post '%s' with %d content blocks", slug, len(post.content))
    return post


def get_static_props(client: PrismicClient, params: Mapping[str, Any]) -> Dict[str, Any]:
    """Return render props for one path."""
    return {'props': {'post': load_post(client, params['slug'])}}
