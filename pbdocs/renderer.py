import re
from collections import namedtuple
from typing import Iterable, Optional, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from markdownify import MarkdownConverter, chomp

from pbdocs.config import CODE_WRAPPER_CLASS, DOC_PAGE_PREFIX, DOCS_HOST


# A rule renders one node: predicate(el) -> bool, transform(el, text) -> str,
# where text is the node's children already converted to Markdown.
Rule = namedtuple("Rule", ["name", "predicate", "transform"])

ABSOLUTE_DOC_LINK = "absolute-doc-link"
RELATIVE_DOC_LINK = "relative-doc-link"
SAME_PAGE_ANCHOR = "same-page-anchor"
EXTERNAL_LINK = "external"

_slug_pattern = "(" + re.escape(DOC_PAGE_PREFIX) + r"[^/#?]*)"
re_absolute_doc_link = re.compile(r"^https?://" + re.escape(DOCS_HOST) + r"/docs/" + _slug_pattern)
re_relative_doc_link = re.compile(r"^/docs/" + _slug_pattern)
re_heading = re.compile(r"^h[1-6]$")

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
CODE_INDENT = "    "
BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt", "figure",
    "footer", "header", "li", "ol", "p", "pre", "section", "table", "tr", "ul",
} | set(HEADING_TAGS)


# --- Code blocks ---
def visible_text(el) -> str:
    """Text of a node as it reads on screen.

    Entities are decoded, <br> becomes a newline and block elements start on
    a line of their own, the way the browser's innerText lays them out.
    """
    parts = []
    _collect_text(el, parts)
    return "".join(parts)


def _break_line(parts):
    if parts and not parts[-1].endswith("\n"):
        parts.append("\n")


def _collect_text(el, parts):
    for node in el.children:
        if isinstance(node, Tag):
            if node.name == "br":
                parts.append("\n")
            elif node.name in BLOCK_TAGS:
                _break_line(parts)
                _collect_text(node, parts)
                _break_line(parts)
            else:
                _collect_text(node, parts)
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            if node:
                parts.append(str(node))


def indent_code(text: str) -> str:
    """Render text as an indented Markdown code block, or "" when there is nothing to show."""
    if not text.strip():
        return ""
    lines = text.replace("\r\n", "\n").split("\n")
    while not lines[0].strip():
        lines.pop(0)
    while not lines[-1].strip():
        lines.pop()
    return "\n\n" + "\n".join(CODE_INDENT + line for line in lines) + "\n\n"


def is_code_wrapper(el) -> bool:
    return el.name == "div" and CODE_WRAPPER_CLASS in (el.get("class") or [])


def _content_children(el):
    return [c for c in el.children
            if isinstance(c, Tag) or (isinstance(c, NavigableString)
                                      and not isinstance(c, PreformattedString)
                                      and c.strip())]


def is_pre_with_code(el) -> bool:
    if el.name != "pre":
        return False
    children = _content_children(el)
    return len(children) == 1 and isinstance(children[0], Tag) and children[0].name == "code"


def is_pre(el) -> bool:
    return el.name == "pre"


def render_code_wrapper(el, text):
    return indent_code(visible_text(el.find("code") or el))


def render_pre_with_code(el, text):
    return indent_code(visible_text(_content_children(el)[0]))


def render_pre(el, text):
    return indent_code(visible_text(el))


# --- Links ---
def classify_href(href: str) -> Tuple[str, Optional[str]]:
    """Return (kind, page slug) for an href; the slug is None unless it points at a docs page."""
    match = re_absolute_doc_link.match(href)
    if match:
        return ABSOLUTE_DOC_LINK, match.group(1)
    match = re_relative_doc_link.match(href)
    if match:
        return RELATIVE_DOC_LINK, match.group(1)
    if href.startswith("#"):
        return SAME_PAGE_ANCHOR, None
    return EXTERNAL_LINK, None


def rewrite_href(href: str, combined: bool = False) -> str:
    """Point docs-page links at the exported output.

    Single-file exports link to the sibling ``<slug>.md`` file, the combined
    document links to the ``#<slug>`` anchor placed before each section.
    Everything else is returned untouched.
    """
    kind, slug = classify_href(href)
    if kind in (ABSOLUTE_DOC_LINK, RELATIVE_DOC_LINK):
        return f"#{slug}" if combined else f"./{slug}.md"
    return href


def is_link(el) -> bool:
    return el.name == "a" and bool(el.get("href"))


def link_transform(combined: bool):
    def transform(el, text):
        prefix, suffix, text = chomp(text)
        return f"{prefix}[{text}]({rewrite_href(el['href'], combined)}){suffix}"
    return transform


# --- Headings (combined document) ---
def is_heading_with_id(el) -> bool:
    return bool(el.name and re_heading.match(el.name) and el.get("id"))


def render_heading_anchor(el, text):
    # Inside table cells and other headings markdownify renders headings inline.
    if el.find_parent(["td", "th"] + HEADING_TAGS) is not None:
        return text
    text = " ".join(text.split())
    if not text:
        return ""
    level = int(el.name[1])
    return f'\n\n<a id="{el["id"]}"></a>\n\n{"#" * level} {text}\n\n'


def namespace_anchors(soup, section_id: str):
    """Prefix heading ids and same-page links with section_id so they stay unique once pages are merged."""
    for heading in soup.find_all(HEADING_TAGS, id=True):
        heading["id"] = f"{section_id}-{heading['id']}"
    for link in soup.find_all("a", href=True):
        href = link["href"]
        if href.startswith("#") and len(href) > 1:
            link["href"] = f"#{section_id}-{href[1:]}"
    return soup


# Order matters: the first matching rule wins, so the code wrapper is tried
# before the <pre> rules and <pre><code> before a bare <pre>.
CODE_RULES = (
    Rule("code_wrapper", is_code_wrapper, render_code_wrapper),
    Rule("pre_with_code", is_pre_with_code, render_pre_with_code),
    Rule("pre", is_pre, render_pre),
)

SINGLE_FILE_RULES = CODE_RULES + (
    Rule("doc_link", is_link, link_transform(combined=False)),
)

COMBINED_RULES = CODE_RULES + (
    Rule("heading_anchor", is_heading_with_id, render_heading_anchor),
    Rule("doc_link", is_link, link_transform(combined=True)),
)


class DocsConverter(MarkdownConverter):
    """markdownify converter that tries a fixed rule table before its default handlers."""

    def __init__(self, rules: Iterable[Rule] = SINGLE_FILE_RULES, **options):
        options.setdefault("heading_style", "ATX")
        options.setdefault("bullets", "-")
        options.setdefault("escape_asterisks", False)
        super().__init__(**options)
        self.rules = tuple(rules)

    def get_conv_fn(self, tag_name):
        default_fn = super().get_conv_fn(tag_name)

        def convert(el, text, parent_tags):
            for rule in self.rules:
                if rule.predicate(el):
                    return rule.transform(el, text)
            if default_fn is None:
                return text
            return default_fn(el, text, parent_tags=parent_tags)

        return convert


def render(html: str, section_id: Optional[str] = None, rules: Optional[Iterable[Rule]] = None) -> str:
    """Convert an HTML fragment to Markdown.

    Passing a section_id renders for the combined document: anchors are
    namespaced first and docs links point at in-document anchors.
    """
    soup = BeautifulSoup(html, "html.parser")
    if section_id:
        namespace_anchors(soup, section_id)
    if rules is None:
        rules = COMBINED_RULES if section_id else SINGLE_FILE_RULES
    return DocsConverter(rules=rules).convert_soup(soup)


def table_of_contents(entries) -> str:
    lines = ["# Table of Contents", ""]
    for index, (identifier, title) in enumerate(entries):
        indent = "" if index == 0 else "  "
        lines.append(f"{indent}- [{title}](#{identifier})")
    return "\n".join(lines) + "\n\n"
