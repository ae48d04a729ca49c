import os
from typing import Optional

from pbdocs.config import CODE_WRAPPER_CLASS, CONTENT_SELECTOR, NAVIGATION_TIMEOUT_MS


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def extract_page_content(page) -> Optional[str]:
    """Return the HTML of the page's content region, or None when the page has none.

    Highlighted code wrappers are swapped for plain <pre> blocks holding the
    text the browser displays, so markup inside them never reaches the renderer.
    """
    return page.evaluate(
        """
        ([selector, wrapperClass]) => {
            const content = document.querySelector(selector);
            if (!content) return null;

            content.querySelectorAll('div.' + wrapperClass).forEach(wrapper => {
                const pre = document.createElement('pre');
                const code = wrapper.querySelector('code');
                const source = code || wrapper;
                pre.textContent = source.innerText || source.textContent || '';
                wrapper.replaceWith(pre);
            });

            return content.innerHTML;
        }
        """,
        [CONTENT_SELECTOR, CODE_WRAPPER_CLASS],
    )


def fetch_page(context, url: str) -> Optional[str]:
    """Load url in a new page of the browser context and return its content HTML.

    Navigation failures and pages without a content region are reported and
    give None; the caller moves on to the next page.
    """
    page = None
    try:
        print(f"Crawling: {url}")
        page = context.new_page()
        page.goto(url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)
        html = extract_page_content(page)
        if not html:
            print(f"No content found at {url}")
            return None
        return html
    except Exception as e:
        print(f"Failed {url}: {e}")
        return None
    finally:
        if page is not None and not page.is_closed():
            page.close()


def write_markdown_file(output_dir: str, filename: str, markdown: str) -> Optional[str]:
    file_path = os.path.join(output_dir, filename)
    try:
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(markdown)
    except OSError as e:
        print(f"Failed to write {file_path}: {e}")
        return None

    print(f"Saved: {file_path}")
    return file_path
