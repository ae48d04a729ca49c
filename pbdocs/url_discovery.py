from typing import Iterable, List, Optional
from urllib.parse import urldefrag, urlparse

from pbdocs.config import DOC_PAGE_PREFIX, ENTRY_URL


def page_slug(url: str) -> Optional[str]:
    """Return the docs page key of a URL, e.g. "js-records" for https://pocketbase.io/docs/js-records/."""
    parts = [p for p in urlparse(url).path.split("/") if p]
    for prev, part in zip(parts, parts[1:]):
        if prev == "docs" and part.startswith(DOC_PAGE_PREFIX):
            return part
    return None


def filter_doc_links(hrefs: Iterable[str], entry_url: str = ENTRY_URL) -> List[str]:
    """Keep unique docs page URLs in the order they were found, leaving out the entry page."""
    entry_slug = page_slug(entry_url)
    seen_slugs = set()
    links = []

    for href in hrefs:
        if not href or f"/docs/{DOC_PAGE_PREFIX}" not in href:
            continue
        url, _ = urldefrag(href)
        slug = page_slug(url)
        if not slug or slug == entry_slug or slug in seen_slugs:
            continue
        seen_slugs.add(slug)
        links.append(url)

    return links


def discover_doc_links(page, entry_url: str = ENTRY_URL) -> List[str]:
    """Collect the docs page links on an already loaded page."""
    hrefs = page.evaluate(
        """
        () => Array.from(document.querySelectorAll('a[href]')).map(link => {
            try {
                return new URL(link.getAttribute('href'), window.location.origin).href;
            } catch (e) {
                return null;
            }
        })
        """
    )
    links = filter_doc_links(hrefs or [], entry_url)
    print(f"Found {len(links)} JS documentation pages")
    return links
