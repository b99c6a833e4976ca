"""Sitemap ping background task."""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from scriptshare.config import Config
from scriptshare.errors.common import NotFoundError

logger = logging.getLogger(__name__)


def ping_search_engine(engine: str, config: Config) -> bool:
    """Notify a search engine about the sitemap. Returns True when accepted."""
    url_template = config.ping_urls.get(engine)
    if url_template is None:
        raise NotFoundError(f"ping engine {engine!r}")
    url = url_template.format(sitemap=quote(config.sitemap_url, safe=""))
    try:
        response = requests.get(url, timeout=5)
    except requests.RequestException:
        logger.exception("Sitemap ping to %s failed", engine)
        return False
    if response.status_code != 200:
        logger.warning(
            "Sitemap ping to %s rejected status=%s body=%s",
            engine,
            response.status_code,
            response.text,
        )
        return False
    logger.info("Sitemap ping to %s delivered", engine)
    return True
