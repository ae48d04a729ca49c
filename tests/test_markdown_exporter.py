import os

from pbdocs.markdown_exporter import export_page, export_pages
from pbdocs.utils import fetch_page, write_markdown_file


PAGES = {
    "https://pocketbase.io/docs/js-records/": '<h1>Records</h1><p>See <a href="/docs/js-routing/">routing</a></p>',
    "https://pocketbase.io/docs/js-routing/": None,
    "https://pocketbase.io/docs/js-logging/": "<pre><code>$app.logger().info(\"hi\")</code></pre>",
}


class FakePage:
    def __init__(self, html=None, error=None):
        self.html = html
        self.error = error
        self.closed = False

    def goto(self, url, wait_until=None, timeout=None):
        if self.error:
            raise self.error

    def evaluate(self, script, arg=None):
        return self.html

    def is_closed(self):
        return self.closed

    def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, page):
        self.page = page

    def new_page(self):
        return self.page


def test_export_pages_skips_pages_without_content(tmp_path):
    written = export_pages(list(PAGES), PAGES.get, str(tmp_path), delay=0)

    assert sorted(os.listdir(tmp_path)) == ["js-logging.md", "js-records.md"]
    assert written == [str(tmp_path / "js-records.md"), str(tmp_path / "js-logging.md")]

    records = (tmp_path / "js-records.md").read_text(encoding="utf-8")
    assert records == "# Records\n\nSee [routing](./js-routing.md)"
    logging = (tmp_path / "js-logging.md").read_text(encoding="utf-8")
    assert logging == '    $app.logger().info("hi")'


def test_export_page_ignores_non_docs_urls(tmp_path):
    assert export_page("https://pocketbase.io/faq/", "<p>x</p>", str(tmp_path)) is None
    assert os.listdir(tmp_path) == []


def test_write_failure_does_not_stop_the_crawl(tmp_path):
    missing = str(tmp_path / "missing")
    assert write_markdown_file(missing, "x.md", "text") is None
    assert export_pages(list(PAGES), PAGES.get, missing, delay=0) == []


def test_fetch_page_returns_content():
    page = FakePage(html="<p>hello</p>")
    assert fetch_page(FakeContext(page), "https://pocketbase.io/docs/js-records/") == "<p>hello</p>"
    assert page.closed


def test_fetch_page_without_content_region():
    page = FakePage(html=None)
    assert fetch_page(FakeContext(page), "https://pocketbase.io/docs/js-records/") is None
    assert page.closed


def test_fetch_page_navigation_error():
    page = FakePage(error=TimeoutError("Timeout 60000ms exceeded"))
    assert fetch_page(FakeContext(page), "https://pocketbase.io/docs/js-records/") is None
    assert page.closed
