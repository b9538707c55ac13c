"""
LOGO SOURCES
---------------------------------------------------------
One adapter per place a logo can come from:

  0. Website       - scrape the company's own home page
  1. Wikipedia     - logo file attached to the company article
  2+ Logo APIs     - Clearbit, Google favicons, DuckDuckGo icons

Every adapter takes (session, identity) and returns a Candidate
or None. Nothing raises past an adapter: network errors, bad
status codes, non-image responses and tiny placeholder images
all mean "this source had nothing".
"""

import logging
import re
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# ========== CONFIGURATION ==========
REQUEST_TIMEOUT = 10  # seconds, per request

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
WIKI_USER_AGENT = "LogoLookup/1.0"

WIKI_API_URL = "https://en.wikipedia.org/w/api.php"
WIKI_THUMB_WIDTH = 400

WEBSITE_MIN_BYTES = 500
WIKI_LOGO_MIN_BYTES = 500
WIKI_PAGE_IMAGE_MIN_BYTES = 1000

IMAGE_HEADERS = {"User-Agent": BROWSER_USER_AGENT, "Accept": "image/*"}
HTML_HEADERS = {"User-Agent": BROWSER_USER_AGENT, "Accept": "text/html"}
WIKI_HEADERS = {"User-Agent": WIKI_USER_AGENT}

# Wikipedia files that show up on nearly every article
GENERIC_FILE_MARKERS = (
    "commons-logo",
    "flag_of",
    "ojs_ui",
    "oojs_ui",
    "wikimedia",
    "wikidata",
    "wikiquote",
    "wiktionary",
    "wiki_letter",
    "question_book",
    "edit-clear",
    "padlock",
    "symbol_support_vote",
    "portal-puzzle",
    "folder_hexagonal",
    "increase2",
    "decrease_positive",
)
BUILDING_MARKERS = ("building", "headquarter", "office", "campus", "tower", "facade")
LOGO_WORDS = ("logo", "mark", "wordmark")
WIKI_IMAGE_SUFFIXES = (".svg", ".png", ".jpg")

SVG_URL_RE = re.compile(
    r"^https://upload\.wikimedia\.org/wikipedia/([^/]+)/([0-9a-f])/([0-9a-f]{2})/(.+\.svg)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Candidate:
    content: bytes
    content_type: str
    source_name: str

    @property
    def byte_length(self):
        return len(self.content)


@dataclass(frozen=True)
class LogoSource:
    """A named adapter in the fallback chain."""

    name: str
    fetch: Callable[[requests.Session, object], Optional[Candidate]]
    min_bytes: int = WEBSITE_MIN_BYTES
    is_icon: bool = False


# =========================================================
# ------------------ ACCEPTANCE ---------------------------
# =========================================================

def accept_image(response, min_bytes, source_name):
    """Return a Candidate if the response is a big enough image, else None."""
    if not response.ok:
        logger.debug(f"{source_name}: HTTP {response.status_code} for {response.url}")
        return None

    content_type = response.headers.get("Content-Type", "")
    if not content_type.lower().startswith("image/"):
        logger.debug(f"{source_name}: not an image ({content_type!r})")
        return None

    content = response.content
    if len(content) < min_bytes:
        logger.debug(f"{source_name}: {len(content)} bytes < {min_bytes}")
        return None

    return Candidate(content=content, content_type=content_type, source_name=source_name)


def fetch_image(session, url, min_bytes, source_name, headers=IMAGE_HEADERS):
    try:
        response = session.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.debug(f"{source_name}: request failed for {url}: {e}")
        return None
    return accept_image(response, min_bytes, source_name)


# =========================================================
# ------------------ WEBSITE SCRAPER ----------------------
# =========================================================

def _rel(tag):
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [r.lower() for r in rel]


def extract_logo_urls(html):
    """
    Logo candidates from a home page, best first:
    og:image, apple-touch-icon, <img> mentioning "logo", favicon.
    """
    soup = BeautifulSoup(html, "html.parser")
    urls = []

    og = soup.find("meta", attrs={"property": re.compile(r"^og:image$", re.I)})
    if og and og.get("content"):
        urls.append(og["content"])

    touch = soup.find(lambda t: t.name == "link" and _rel(t) == ["apple-touch-icon"] and t.get("href"))
    if touch:
        urls.append(touch["href"])

    for img in soup.find_all("img", src=True):
        attrs = [" ".join(img.get("class") or []), img.get("id") or "", img.get("alt") or "", img["src"]]
        if any("logo" in a.lower() for a in attrs):
            urls.append(img["src"])

    icon = soup.find(lambda t: t.name == "link" and _rel(t) == ["icon"] and t.get("href"))
    if icon:
        urls.append(icon["href"])

    # keep order, drop repeats
    return list(dict.fromkeys(u.strip() for u in urls if u.strip()))


def resolve_url(url, base_url):
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        return base_url + url
    if not url.startswith("http"):
        return base_url + "/" + url
    return url


def fetch_from_website(session, identity):
    base_url = f"https://{identity.domain}"
    try:
        response = session.get(
            base_url, headers=HTML_HEADERS, timeout=REQUEST_TIMEOUT, allow_redirects=True
        )
        if not response.ok:
            logger.debug(f"Website: HTTP {response.status_code} for {base_url}")
            return None
        html = response.text
    except requests.RequestException as e:
        logger.debug(f"Website: could not load {base_url}: {e}")
        return None

    for logo_url in extract_logo_urls(html):
        candidate = fetch_image(session, resolve_url(logo_url, base_url), WEBSITE_MIN_BYTES, "Website")
        if candidate:
            return candidate

    return None


# =========================================================
# ------------------ WIKIPEDIA ----------------------------
# =========================================================

def wiki_title_variants(title):
    encoded = title.replace("&", "%26")
    variants = [
        title,
        f"{title}_(company)",
        f"{title},_Inc.",
        f"{title}_&_Company",
        f"{title}_%26_Company",
        encoded,
        f"{encoded}_Company",
        f"{title}_Corporation",
        f"{title}_Inc.",
    ]
    return list(dict.fromkeys(variants))


def _alnum(text):
    return re.sub(r"[^a-z0-9]", "", text.lower())


def is_generic_file(file_title, company=""):
    name = file_title.lower().replace(" ", "_")
    if any(marker in name for marker in GENERIC_FILE_MARKERS):
        return True
    if ("icon" in name or "symbol" in name) and "logo" not in name:
        return True
    # building words inside the company name itself do not count
    rest = _alnum(name)
    if _alnum(company):
        rest = rest.replace(_alnum(company), "")
    return looks_like_building(rest)


def looks_like_building(file_title):
    name = file_title.lower()
    return any(marker in name for marker in BUILDING_MARKERS)


def pick_logo_file(file_titles, company):
    """First file named after the company that looks like a logo, or None."""
    company_clean = _alnum(company)
    if not company_clean:
        return None

    for file_title in file_titles:
        name = file_title.lower()
        if not name.endswith(WIKI_IMAGE_SUFFIXES):
            continue
        if is_generic_file(file_title, company):
            continue
        if company_clean in _alnum(name) and any(w in name for w in LOGO_WORDS):
            return file_title
    return None


def svg_to_png_thumb(url, width=WIKI_THUMB_WIDTH):
    match = SVG_URL_RE.match(url)
    if not match:
        return url
    project, hash1, hash2, filename = match.groups()
    return (
        f"https://upload.wikimedia.org/wikipedia/{project}/thumb/"
        f"{hash1}/{hash2}/{filename}/{width}px-{filename}.png"
    )


def _first_page(data):
    pages = (data.get("query") or {}).get("pages") or {}
    for page in pages.values():
        return page
    return None


def _wiki_query(session, **params):
    params.update(action="query", format="json")
    response = session.get(WIKI_API_URL, params=params, headers=WIKI_HEADERS, timeout=REQUEST_TIMEOUT)
    if not response.ok:
        return None
    return _first_page(response.json())


def _wiki_file_url(session, file_title):
    page = _wiki_query(session, titles=file_title, prop="imageinfo", iiprop="url")
    info = (page or {}).get("imageinfo") or []
    if not info or not info[0].get("url"):
        return None
    return info[0]["url"]


def fetch_from_wikipedia(session, identity):
    page_images = {}  # lead image url -> file name, first seen wins

    for title in wiki_title_variants(identity.wiki_title):
        try:
            page = _wiki_query(
                session, titles=title, prop="images|pageimages", piprop="original|name"
            )
            if not page or "missing" in page:
                continue

            if page.get("original", {}).get("source"):
                page_images.setdefault(page["original"]["source"], page.get("pageimage", ""))

            file_titles = [img.get("title", "") for img in page.get("images") or []]
            logo_file = pick_logo_file(file_titles, identity.company)
            if not logo_file:
                continue

            image_url = _wiki_file_url(session, logo_file)
            if not image_url:
                continue

            logger.debug(f"Wikipedia: {title} -> {logo_file}")
            candidate = fetch_image(
                session, svg_to_png_thumb(image_url), WIKI_LOGO_MIN_BYTES, "Wikipedia", WIKI_HEADERS
            )
            if candidate:
                return candidate
        except (requests.RequestException, ValueError) as e:
            logger.debug(f"Wikipedia: lookup failed for {title}: {e}")

    # no dedicated logo file, fall back to the article's lead image
    for image_url, file_name in page_images.items():
        if looks_like_building(file_name) or looks_like_building(image_url):
            logger.debug(f"Wikipedia: skipping page image {file_name!r}, looks like a building")
            continue
        candidate = fetch_image(
            session, svg_to_png_thumb(image_url), WIKI_PAGE_IMAGE_MIN_BYTES, "Wikipedia", WIKI_HEADERS
        )
        if candidate:
            return candidate

    return None


# =========================================================
# ------------------ LOGO APIS ----------------------------
# =========================================================

def fetch_from_api(session, identity, build_url, min_bytes, source_name):
    return fetch_image(session, build_url(identity.domain), min_bytes, source_name)


def api_source(name, build_url, min_bytes, is_icon=False):
    fetch = partial(fetch_from_api, build_url=build_url, min_bytes=min_bytes, source_name=name)
    return LogoSource(name=name, fetch=fetch, min_bytes=min_bytes, is_icon=is_icon)


API_SOURCES = (
    api_source("Clearbit", lambda d: f"https://logo.clearbit.com/{d}", 1000),
    # favicon services answer unknown domains with a small stock globe
    api_source("Google Favicon", lambda d: f"https://www.google.com/s2/favicons?domain={d}&sz=256", 2000, is_icon=True),
    api_source("DuckDuckGo", lambda d: f"https://icons.duckduckgo.com/ip3/{d}.ico", 2000, is_icon=True),
)

# Fallback order: website, Wikipedia, then the APIs.
SOURCES = (
    LogoSource("Website", fetch_from_website, WEBSITE_MIN_BYTES),
    LogoSource("Wikipedia", fetch_from_wikipedia, WIKI_LOGO_MIN_BYTES),
) + API_SOURCES

TOTAL_SOURCES = len(SOURCES)
