"""Settings for crawling the PocketBase JavaScript docs and exporting them as Markdown."""

# Site Settings
DOCS_HOST = "pocketbase.io"  # Host serving the documentation
ENTRY_SLUG = "js-overview"  # Page the crawl starts from
ENTRY_URL = f"https://{DOCS_HOST}/docs/{ENTRY_SLUG}/"
DOC_PAGE_PREFIX = "js-"  # Only /docs/<prefix>* pages are crawled and rewritten
CONTENT_SELECTOR = ".page-content"  # Region holding a page's content
CODE_WRAPPER_CLASS = "code-wrapper"  # div class used around highlighted code

# Browser Settings
NAVIGATION_TIMEOUT_MS = 60000  # Per-page navigation timeout
PAGE_DELAY_SECONDS = 0.5  # Pause between pages to go easy on the server

# Output Settings
OUTPUT_DIR = "jsdocs"
COMBINED_FILENAME = "pocketbase-js-sdk-complete.md"
COMBINED_TITLE = "PocketBase JavaScript SDK Documentation"
ENTRY_TITLE = "JavaScript SDK Overview"

# Section titles for the combined document
SECTION_TITLES = {
    "js-event-hooks": "Event Hooks",
    "js-routing": "Routing",
    "js-database": "Database",
    "js-records": "Record Operations",
    "js-collections": "Collection Operations",
    "js-migrations": "Migrations",
    "js-jobs-scheduling": "Jobs Scheduling",
    "js-sending-emails": "Sending Emails",
    "js-rendering-templates": "Rendering Templates",
    "js-console-commands": "Console Commands",
    "js-sending-http-requests": "Sending HTTP Requests",
    "js-realtime": "Realtime Messaging",
    "js-filesystem": "Filesystem",
    "js-logging": "Logging",
}

# Reading order for the combined document
SECTION_ORDER = [
    "js-overview",
    "js-event-hooks",
    "js-routing",
    "js-database",
    "js-records",
    "js-collections",
    "js-migrations",
    "js-jobs-scheduling",
    "js-sending-emails",
    "js-rendering-templates",
    "js-console-commands",
    "js-sending-http-requests",
    "js-realtime",
    "js-filesystem",
    "js-logging",
]
