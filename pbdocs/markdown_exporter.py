import time
from typing import Callable, List, Optional, Sequence

from playwright.sync_api import sync_playwright

from pbdocs.config import ENTRY_URL, NAVIGATION_TIMEOUT_MS, OUTPUT_DIR, PAGE_DELAY_SECONDS
from pbdocs.renderer import render
from pbdocs.url_discovery import discover_doc_links, page_slug
from pbdocs.utils import ensure_dir, extract_page_content, fetch_page, write_markdown_file


def export_page(url: str, html: str, output_dir: str) -> Optional[str]:
    """Render one page and write it to <slug>.md. Returns the file path, or None if nothing was written."""
    slug = page_slug(url)
    if not slug:
        print(f"Skipping {url}: not a docs page")
        return None
    return write_markdown_file(output_dir, f"{slug}.md", render(html))


def export_pages(
    urls: Sequence[str],
    fetch: Callable[[str], Optional[str]],
    output_dir: str = OUTPUT_DIR,
    delay: float = PAGE_DELAY_SECONDS,
) -> List[str]:
    """Fetch, render and write each page in turn.

    A page the fetcher returns None for gets no file; the crawl carries on
    with the next URL.
    """
    written = []
    for idx, url in enumerate(urls, 1):
        html = fetch(url)
        if html:
            file_path = export_page(url, html, output_dir)
            if file_path:
                written.append(file_path)
                print(f"MD ({idx}/{len(urls)}): {page_slug(url)}")
        if delay:
            time.sleep(delay)
    return written


def export_markdown(output_dir: str = OUTPUT_DIR, entry_url: str = ENTRY_URL) -> Optional[str]:
    """Crawl the JS docs starting at entry_url and write one Markdown file per page.

    Returns the output directory, or None if the crawl itself failed.
    """
    ensure_dir(output_dir)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        try:
            context = browser.new_context()
            main_page = context.new_page()

            print("Starting crawl of PocketBase JS documentation...")
            main_page.goto(entry_url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)

            html = extract_page_content(main_page)
            if html:
                export_page(entry_url, html, output_dir)
            else:
                print(f"No content found at {entry_url}")

            links = discover_doc_links(main_page, entry_url)
            main_page.close()

            export_pages(links, lambda url: fetch_page(context, url), output_dir)
        except Exception as e:
            print(f"Error during crawling: {e}")
            return None
        finally:
            browser.close()

    print("Crawling completed successfully!")
    return output_dir
