from pbdocs.url_discovery import discover_doc_links, filter_doc_links, page_slug


ENTRY = "https://pocketbase.io/docs/js-overview/"


class FakePage:
    def __init__(self, hrefs):
        self.hrefs = hrefs

    def evaluate(self, script, arg=None):
        return self.hrefs


def test_page_slug():
    assert page_slug("https://pocketbase.io/docs/js-records/") == "js-records"
    assert page_slug("https://pocketbase.io/docs/js-routing#groups") == "js-routing"
    assert page_slug("/docs/js-database/") == "js-database"
    assert page_slug("https://pocketbase.io/docs/go-overview/") is None
    assert page_slug("https://pocketbase.io/") is None


def test_filter_doc_links_keeps_unique_docs_pages_in_order():
    hrefs = [
        "https://pocketbase.io/docs/js-overview/",
        "https://pocketbase.io/docs/js-records/",
        "https://pocketbase.io/docs/go-overview/",
        "https://pocketbase.io/docs/js-records/#fields",
        "https://github.com/pocketbase/pocketbase",
        "https://pocketbase.io/docs/js-routing/",
        "https://pocketbase.io/docs/js-overview/#intro",
    ]
    assert filter_doc_links(hrefs, ENTRY) == [
        "https://pocketbase.io/docs/js-records/",
        "https://pocketbase.io/docs/js-routing/",
    ]


def test_discover_doc_links_ignores_unresolvable_hrefs():
    page = FakePage([None, "https://pocketbase.io/docs/js-logging/", ""])
    assert discover_doc_links(page, ENTRY) == ["https://pocketbase.io/docs/js-logging/"]


def test_discover_doc_links_handles_empty_page():
    assert discover_doc_links(FakePage(None), ENTRY) == []
