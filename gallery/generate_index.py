"""
Gallery page generator for the Pangea home page.

Reads the category map in src/index.json, fetches the MiniSearch index from a
running preview server, buckets the pages into categories and prints the
markdown for src/thumbnail/index.md.

Usage:
    python -m gallery.generate_index > src/thumbnail/index.md
    python -m gallery.generate_index --debug -o src/thumbnail/index.md
"""

import argparse
import html
import json
import sys
from pathlib import Path
from typing import Optional

import requests

from .config import (
    CATEGORIES_PATH,
    FRONT_MATTER,
    HTTP_ROOT,
    INTRO,
    MINISEARCH_PATH,
    MORE_CATEGORY,
    MORE_TITLE,
    REQUEST_TIMEOUT,
    SOURCE_ROOT,
    STYLE,
    THUMBNAIL_PREFIX,
    USER_AGENT,
)
from .models import CategoryFile, Document, MinisearchIndex, Section, short_id_key


class GalleryError(Exception):
    """Base class for gallery generation errors."""


class UnknownPageError(GalleryError):
    """An explicit category lists a page that isn't in the search index."""

    def __init__(self, page_id: str):
        super().__init__(f"Couldn't find {page_id}")
        self.page_id = page_id


def log(message: str):
    # stdout carries the generated page
    print(message, file=sys.stderr)


# ─── Loading ─────────────────────────────────────────────────────────────────

def make_session() -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    return session


def load_categories(path=CATEGORIES_PATH) -> dict[str, Section]:
    """Load the ordered category map from src/index.json."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return dict(CategoryFile.model_validate(data).sections)


def fetch_minisearch_index(
    http_root: str = HTTP_ROOT,
    session: Optional[requests.Session] = None,
) -> MinisearchIndex:
    """Fetch the MiniSearch index from the preview server."""
    if session is None:
        with make_session() as session:
            return fetch_minisearch_index(http_root, session)

    url = f"{http_root.rstrip('/')}{MINISEARCH_PATH}"
    log(f"Fetching search index: {url}")
    resp = session.get(url, timeout=REQUEST_TIMEOUT)
    resp.raise_for_status()
    return MinisearchIndex.model_validate(resp.json())


def _thumbnail(source_root: Path, doc_id: str, scheme: str) -> Optional[str]:
    path = f"{THUMBNAIL_PREFIX}{doc_id}-{scheme}.png"
    try:
        if (source_root / path).exists():
            return f"../{path}"
    except OSError:
        pass
    return None


def build_documents(index: MinisearchIndex, source_root=SOURCE_ROOT) -> dict[str, Document]:
    """
    Build one Document per indexed page, keyed by MiniSearch short id.

    Thumbnails are attached only when the png exists under source_root.
    """
    root = Path(source_root)
    documents = {}
    for short_id in index.short_ids():
        doc_id = index.document_ids[short_id]
        stored = index.stored_fields.get(short_id) or {}
        documents[short_id] = Document(
            id=doc_id,
            title=str(stored.get("title") or ""),
            light=_thumbnail(root, doc_id, "light"),
            dark=_thumbnail(root, doc_id, "dark"),
        )
    return documents


# ─── Categories ──────────────────────────────────────────────────────────────

def keyword_ids(index: MinisearchIndex, word: str) -> list[str]:
    """Short ids of pages with ``word`` in their title or keywords."""
    ids: list[str] = []
    for term, fields in index.index:
        if term != word:
            continue
        ids = []
        for name in ("title", "keywords"):
            field_id = index.field_id(name)
            if field_id is None:
                continue
            for short_id in sorted(fields.get(field_id) or {}, key=short_id_key):
                if short_id not in ids:
                    ids.append(short_id)
    return ids


def categorize(
    categories: dict[str, Section],
    index: MinisearchIndex,
    documents: dict[str, Document],
) -> dict[str, list[str]]:
    """
    Assign short ids to each category, in category order.

    Keyword categories that match nothing in the index are left out. The
    catch-all category always holds every page.
    """
    by_page = {doc.id: short_id for short_id, doc in documents.items()}
    assignments: dict[str, list[str]] = {}

    for word, section in categories.items():
        if word == MORE_CATEGORY:
            assignments[word] = []
            continue
        if section.pages is not None:
            ids = []
            for page in section.pages:
                if page not in by_page:
                    raise UnknownPageError(page)
                if by_page[page] not in ids:
                    ids.append(by_page[page])
            assignments[word] = ids
        elif any(term == word for term, _ in index.index):
            assignments[word] = [i for i in keyword_ids(index, word) if i in documents]

    assignments[MORE_CATEGORY] = list(documents)
    return assignments


# ─── Rendering ───────────────────────────────────────────────────────────────

def render_card(doc: Document) -> str:
    href = html.escape(doc.id)
    title = html.escape(doc.title)
    if doc.light and doc.dark:
        return (
            f'<a href="{href}"><picture>'
            f'<source srcset="{html.escape(doc.dark)}" media="(prefers-color-scheme: dark)">'
            f'<img src="{html.escape(doc.light)}" loading="lazy"></picture>'
            f"<q>{title}</q></a>"
        )
    if doc.light or doc.dark:
        src = html.escape(doc.light or doc.dark)
        return f'<a href="{href}"><img src="{src}" loading="lazy"><q>{title}</q></a>'
    return f'<a href="{href}"><q>{title}</q></a>'


def render_group(section: Section, docs: list[Document]) -> str:
    description = f"\n\n{section.description}\n\n" if section.description else ""
    cards = "\n".join(render_card(doc) for doc in docs)
    return f'## {section.title}\n\n{description}<div class="list">\n{cards}\n</div>'


def render_groups(
    categories: dict[str, Section],
    assignments: dict[str, list[str]],
    documents: dict[str, Document],
) -> list[str]:
    """Render each category; a page only shows up in the first one claiming it."""
    seen = set()
    groups = []
    for word, ids in assignments.items():
        section = categories.get(word) or Section(title=MORE_TITLE)
        docs = []
        for short_id in ids:
            if short_id in seen:
                if word != MORE_CATEGORY:
                    log(f"WARN: duplicate {documents[short_id].id}")
                continue
            seen.add(short_id)
            docs.append(documents[short_id])
        groups.append(render_group(section, docs))
    return groups


def show_debug(assignments: dict[str, list[str]], documents: dict[str, Document]) -> str:
    """List the page ids each category contributes."""
    seen = set()
    blocks = []
    for word, ids in assignments.items():
        entries = []
        for short_id in ids:
            entry = json.dumps(documents[short_id].id)
            if entry not in seen:
                seen.add(entry)
                entries.append(entry)
        blocks.append(f"*{word}*\n\n" + ", <br>".join(entries))
    return "\n\n".join(blocks)


def render_page(groups: list[str], debug: Optional[str] = None) -> str:
    head = f"{FRONT_MATTER}\n\n{INTRO}\n\n{STYLE}"
    body = "\n\n\n".join(groups)
    return f"{head}\n\n<div class=gallery>\n\n{body}\n\n</div>\n\n{debug or ''}\n"


def generate(
    http_root: str = HTTP_ROOT,
    categories_path=CATEGORIES_PATH,
    source_root=SOURCE_ROOT,
    debug: bool = False,
    session: Optional[requests.Session] = None,
) -> str:
    """Build the gallery page markdown."""
    categories = load_categories(categories_path)
    index = fetch_minisearch_index(http_root, session=session)
    documents = build_documents(index, source_root)
    log(f"Found {len(documents)} pages in search index")

    assignments = categorize(categories, index, documents)
    groups = render_groups(categories, assignments, documents)
    log(f"Rendered {len(groups)} categories")

    return render_page(groups, show_debug(assignments, documents) if debug else None)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate the gallery home page from the site's search index"
    )
    parser.add_argument(
        "--http-root", default=HTTP_ROOT,
        help=f"Preview server root (default: {HTTP_ROOT})"
    )
    parser.add_argument(
        "--categories", default=CATEGORIES_PATH,
        help=f"Category map (default: {CATEGORIES_PATH})"
    )
    parser.add_argument(
        "--source-root", default=SOURCE_ROOT,
        help=f"Site source directory holding thumbnails (default: {SOURCE_ROOT})"
    )
    parser.add_argument(
        "-o", "--output",
        help="Write the page to this file instead of stdout"
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Append the page ids assigned to each category"
    )
    args = parser.parse_args(argv)

    try:
        page = generate(
            http_root=args.http_root,
            categories_path=args.categories,
            source_root=args.source_root,
            debug=args.debug,
        )
    except (GalleryError, requests.exceptions.RequestException, ValueError, OSError) as e:
        # ValueError covers malformed JSON and pydantic validation errors
        log(f"ERROR: {e}")
        return 1

    if args.output:
        Path(args.output).write_text(page, encoding="utf-8")
        log(f"Output: {args.output}")
    else:
        sys.stdout.write(page)
    return 0


if __name__ == "__main__":
    sys.exit(main())
