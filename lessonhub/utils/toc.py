import re
from typing import List, Optional, Tuple

from lessonhub.schemas.toc import TOCItem

SOURCE_MARKDOWN = "markdown"
SOURCE_DEFAULT = "default"
SOURCE_ERROR = "error"

TOC_HEADING_RE = re.compile(r"^##?\s*(table of contents|contents|toc)\s*$", re.IGNORECASE)
# A level 1-2 heading that is not itself a link ends the explicit TOC block
TOC_END_RE = re.compile(r"^##?\s+[^\[]+$")
TOC_LINK_RE = re.compile(r"^\s*[-*]\s*\[([^\]]+)\]\(#([^)]+)\)")
HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")

_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_SPACE_RE = re.compile(r"\s+", re.ASCII)
_SLUG_DASH_RE = re.compile(r"-+")

DEFAULT_TOC = (
    ("learning-objectives", "Learning Objectives"),
    ("introduction", "Introduction"),
    ("main-concepts", "Main Concepts"),
    ("practical-examples", "Practical Examples"),
    ("hands-on-practice", "Hands-on Practice"),
    ("review-summary", "Review & Summary"),
    ("assignments", "Assignments"),
    ("resources", "Additional Resources"),
)


def strip_markdown(title: str) -> str:
    """Remove bold, italic, inline code and link syntax from a heading."""
    title = _BOLD_RE.sub(r"\1", title)
    title = _ITALIC_RE.sub(r"\1", title)
    title = _CODE_RE.sub(r"\1", title)
    title = _LINK_RE.sub(r"\1", title)
    return title


def clean_title(title: str) -> str:
    return strip_markdown(title).strip()


def slugify(title: str) -> str:
    """
    Derive an anchor id from a heading title.

    Markdown syntax is stripped, the text lower-cased, characters other than
    word characters, whitespace and hyphens dropped, whitespace runs turned
    into single hyphens, and repeated or surrounding hyphens collapsed.
    """
    slug = strip_markdown(title).lower()
    slug = _SLUG_STRIP_RE.sub("", slug)
    slug = _SLUG_SPACE_RE.sub("-", slug)
    slug = _SLUG_DASH_RE.sub("-", slug)
    return slug.strip("-")


def default_toc_items() -> List[TOCItem]:
    return [TOCItem(id=item_id, title=title, level=2) for item_id, title in DEFAULT_TOC]


def extract_explicit_toc(content: str) -> List[TOCItem]:
    """Collect the link list under a "Table of Contents" heading, if any."""
    items: List[TOCItem] = []
    in_toc = False

    for line in content.split("\n"):
        if TOC_HEADING_RE.match(line):
            in_toc = True
            continue

        if not in_toc:
            continue

        if TOC_END_RE.match(line):
            break

        match = TOC_LINK_RE.match(line)
        if match:
            indentation = len(line) - len(line.lstrip(" \t"))
            level = min(2 + indentation // 2, 6)
            items.append(TOCItem(id=match.group(2), title=match.group(1), level=level))

    return items


def extract_heading_toc(content: str) -> List[TOCItem]:
    """Build an outline from the level 2-6 markdown headings of a body."""
    items: List[TOCItem] = []

    for line in content.split("\n"):
        match = HEADING_RE.match(line)
        if not match:
            continue

        level = len(match.group(1))
        title = match.group(2)
        # h1 is the lesson title
        if level <= 1 or not title.strip():
            continue

        items.append(TOCItem(id=slugify(title), title=clean_title(title), level=level))

    return items


def extract_toc(content: Optional[str]) -> Tuple[List[TOCItem], str]:
    """
    Derive the table of contents for a lesson body.

    An explicit "Table of Contents" link list wins; otherwise headings are
    scanned. When neither yields anything the generic default outline is
    returned.

    Args:
        content: Lesson markdown body, or None when there is no lesson

    Returns:
        (items, source) where source is "markdown", "default" or "error"
    """
    if content is None:
        return default_toc_items(), SOURCE_ERROR

    items = extract_explicit_toc(content)
    if not items:
        items = extract_heading_toc(content)

    if not items:
        return default_toc_items(), SOURCE_DEFAULT
    return items, SOURCE_MARKDOWN
