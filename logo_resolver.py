"""
LOGO RESOLVER
---------------------------------------------------------
Tries the logo sources in their fixed order and returns the
first image one of them accepts.

    resolve_logo("Apple")              # website -> ... -> DuckDuckGo
    resolve_logo("Apple", source_index=3)   # Google Favicon only

Passing source_index is the "try another source" retry: the
caller moves to next_source_index() on each retry.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

import requests

from domains import resolve_identity
from logo_sources import SOURCES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    company: str
    domain: str
    content: bytes
    content_type: str
    source_name: str
    source_index: int

    found = True


@dataclass(frozen=True)
class NotFound:
    company: str
    domain: str
    tried_sources: Tuple[str, ...] = field(default_factory=tuple)
    source_index: Optional[int] = None

    found = False


def next_source_index(current, total=len(SOURCES)):
    return ((current or 0) + 1) % total


def source_order(sources, allow_fallback=True, prefer_icon=False):
    """Indexes into `sources` in the order a full pass should try them."""
    order = [i for i, s in enumerate(sources) if allow_fallback or not s.is_icon]
    if prefer_icon:
        order.sort(key=lambda i: not sources[i].is_icon)
    return order


def _try_source(source, session, identity):
    try:
        return source.fetch(session, identity)
    except Exception as e:
        logger.warning(f"{source.name}: unexpected error for {identity.domain}: {e}")
        return None


def _found(identity, candidate, index):
    return Found(
        company=identity.company,
        domain=identity.domain,
        content=candidate.content,
        content_type=candidate.content_type,
        source_name=candidate.source_name,
        source_index=index,
    )


def resolve_logo(
    company,
    source_index=None,
    *,
    sources=SOURCES,
    session=None,
    allow_fallback=True,
    prefer_icon=False,
):
    """
    Resolve one company name to a logo.

    Args:
        company: Free-text company name or domain
        source_index: Try only this source (retry mode). None tries them all.
        sources: Ordered adapter list, defaults to SOURCES
        session: requests.Session to reuse; a private one is opened otherwise
        allow_fallback: False skips the favicon-style icon sources
        prefer_icon: Try the icon sources before the others

    Returns:
        Found or NotFound
    """
    identity = resolve_identity(company)
    own_session = session is None
    if own_session:
        session = requests.Session()

    try:
        if source_index is not None:
            if not 0 <= source_index < len(sources):
                logger.info(f"{company}: no source #{source_index} (have {len(sources)})")
                return NotFound(identity.company, identity.domain, (), source_index)
            order = [source_index]
        else:
            order = source_order(sources, allow_fallback, prefer_icon)

        tried = []
        for i in order:
            source = sources[i]
            tried.append(source.name)
            candidate = _try_source(source, session, identity)
            if candidate:
                logger.info(
                    f"{company}: logo from {source.name} "
                    f"({candidate.byte_length} bytes, {candidate.content_type})"
                )
                return _found(identity, candidate, i)

        logger.info(f"{company}: no logo found for {identity.domain} (tried {', '.join(tried)})")
        return NotFound(identity.company, identity.domain, tuple(tried), source_index)
    finally:
        if own_session:
            session.close()
