import os
import time
from collections import namedtuple
from typing import Callable, Iterable, List, Optional, Sequence

from playwright.sync_api import sync_playwright

from pbdocs.config import (
    COMBINED_FILENAME, COMBINED_TITLE, ENTRY_TITLE, ENTRY_URL, NAVIGATION_TIMEOUT_MS,
    OUTPUT_DIR, PAGE_DELAY_SECONDS, SECTION_ORDER, SECTION_TITLES,
)
from pbdocs.renderer import render, table_of_contents
from pbdocs.url_discovery import discover_doc_links, page_slug
from pbdocs.utils import ensure_dir, fetch_page, write_markdown_file


Section = namedtuple("Section", ["id", "url", "title"])


def build_sections(links: Iterable[str], entry_url: str = ENTRY_URL) -> List[Section]:
    """Entry page first, then one section per discovered docs page."""
    entry_id = page_slug(entry_url)
    sections = [Section(entry_id, entry_url, ENTRY_TITLE)]
    seen = {entry_id}
    for link in links:
        slug = page_slug(link)
        if not slug or slug in seen:
            continue
        seen.add(slug)
        sections.append(Section(slug, link, SECTION_TITLES.get(slug, slug)))
    return sections


def order_sections(sections: Iterable[Section], order: Sequence[str] = SECTION_ORDER) -> List[Section]:
    """Sort sections by their position in order; unlisted ones follow in the order they came."""
    rank = {slug: idx for idx, slug in enumerate(order)}
    return sorted(sections, key=lambda s: rank.get(s.id, len(rank)))


def compile_document(
    sections: Sequence[Section],
    fetch: Callable[[str], Optional[str]],
    delay: float = PAGE_DELAY_SECONDS,
) -> str:
    """Fetch every section and join them into one Markdown document.

    The table of contents lists all sections; sections without content are
    left out of the body.
    """
    parts = [
        f"# {COMBINED_TITLE}\n\n",
        table_of_contents((s.id, s.title) for s in sections),
        "\n---\n\n",
    ]

    for idx, section in enumerate(sections, 1):
        html = fetch(section.url)
        if not html:
            continue

        parts.append(f'<a id="{section.id}"></a>\n\n')
        parts.append(f"# {section.title}\n\n")
        parts.append(render(html, section_id=section.id))
        parts.append("\n\n---\n\n")
        print(f"Section ({idx}/{len(sections)}): {section.title}")

        if delay:
            time.sleep(delay)

    return "".join(parts)


def export_combined(output_dir: str = OUTPUT_DIR, entry_url: str = ENTRY_URL) -> Optional[str]:
    """Crawl the JS docs into a single Markdown file.

    Returns the path of the written document, or None on failure.
    """
    ensure_dir(output_dir)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        try:
            context = browser.new_context()
            main_page = context.new_page()

            print("Starting crawl of PocketBase JS documentation...")
            main_page.goto(entry_url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)
            links = discover_doc_links(main_page, entry_url)
            main_page.close()

            sections = order_sections(build_sections(links, entry_url))
            document = compile_document(sections, lambda url: fetch_page(context, url))
        except Exception as e:
            print(f"Error during crawling: {e}")
            return None
        finally:
            browser.close()

    file_path = write_markdown_file(output_dir, COMBINED_FILENAME, document)
    if file_path:
        print(f"\nSaved complete documentation to: {os.path.abspath(file_path)}")
    return file_path
