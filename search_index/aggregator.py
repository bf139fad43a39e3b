"""
Combined search index for the Pangea search page.

Pulls the MiniSearch index out of several documentation sites and prints them
as one JSON object keyed by site:

    {"d3": {"source": "...", "index": {...}}, "d3docs": {...}, ...}

Hashed asset names are discovered by pattern matching over the pages and
JavaScript bundles each site serves.

Usage:
    python -m search_index.aggregator > src/search.pangea.json
    python -m search_index.aggregator --only plot --indent 2
"""

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Optional

import requests

from .config import FRAMEWORK, REQUEST_TIMEOUT, SOURCES, USER_AGENT, VITEPRESS


class SearchIndexError(Exception):
    """Base class for search index aggregation errors."""


class AssetNotFoundError(SearchIndexError):
    """A hashed asset name could not be found in the referring file."""

    def __init__(self, needle: str, ref: str):
        super().__init__(f"can't find {needle} in {ref}")
        self.needle = needle
        self.ref = ref


class SearchModuleError(SearchIndexError):
    """A VitePress search index module didn't have the expected shape."""


def log(message: str):
    print(message, file=sys.stderr)


# ─── HTTP ────────────────────────────────────────────────────────────────────

def make_session() -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    return session


def fetch_text(url: str, session: requests.Session) -> str:
    resp = session.get(url, timeout=REQUEST_TIMEOUT)
    resp.raise_for_status()
    return resp.text


def find_asset(needle: str, ext: str, ref: str, session: requests.Session) -> str:
    """
    Return the first ``<needle>.<hash>.<ext>`` file name mentioned in ``ref``.

    Matching is case-insensitive.
    """
    pattern = re.compile(
        rf"\b{re.escape(needle)}\.[a-z0-9_-]+\.{re.escape(ext)}\b", re.IGNORECASE
    )
    m = pattern.search(fetch_text(ref, session))
    if not m:
        raise AssetNotFoundError(needle, ref)
    return m.group(0)


# ─── VitePress search module ─────────────────────────────────────────────────

MODULE_HEAD = re.compile(r"^\s*const\s+[\w$]+\s*=\s*")
MODULE_TAIL = re.compile(r";\s*export\s*\{\s*[\w$]+\s+as\s+default\s*\}\s*;?\s*$")

JS_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")

JS_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
LINE_CONTINUATIONS = ("\n", "\r", "\r\n", "\u2028", "\u2029")


def _unescape(m: re.Match) -> str:
    seq = m.group(1)
    if seq.startswith("u{"):
        return chr(int(seq[2:-1], 16))
    if seq[0] == "u" and len(seq) == 5:
        return chr(int(seq[1:], 16))
    if seq[0] == "x" and len(seq) == 3:
        return chr(int(seq[1:], 16))
    if seq in LINE_CONTINUATIONS:
        return ""
    return JS_SIMPLE_ESCAPES.get(seq, seq)


def decode_js_string(literal: str) -> str:
    """Decode a quoted JavaScript string literal without evaluating it."""
    literal = literal.strip()
    if len(literal) < 2 or literal[0] not in "'\"`" or literal[-1] != literal[0]:
        raise SearchModuleError("Expected a quoted string literal")

    if literal[0] == '"':
        # Bundlers usually emit JSON-compatible double-quoted strings
        try:
            return json.loads(literal)
        except json.JSONDecodeError:
            pass

    decoded = JS_ESCAPE.sub(_unescape, literal[1:-1])
    # Re-pair surrogates produced by \uD83D\uDE00 style escapes
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def escape_surrogates(text: str) -> str:
    """Escape unpaired surrogates as \\uXXXX, like JSON.stringify does."""
    return LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)


def parse_search_module(text: str):
    """
    Parse ``const x = "<json>";export{x as default};`` into the JSON it wraps.
    """
    head = MODULE_HEAD.match(text)
    tail = MODULE_TAIL.search(text)
    if not head or not tail or tail.start() < head.end():
        raise SearchModuleError("Unexpected search index module layout")

    payload = decode_js_string(text[head.end():tail.start()])
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise SearchModuleError(f"Search index is not valid JSON: {e}") from e


# ─── Sites ───────────────────────────────────────────────────────────────────

def get_minisearch_index_fw(source: str, session: requests.Session) -> dict:
    """
    Get the MiniSearch index of an Observable Framework site.

    The hashed minisearch.<hash>.json file is referenced in search.js.
    """
    minisearch = find_asset("minisearch", "json", f"{source}_observablehq/search.js", session)
    index = json.loads(fetch_text(f"{source}_observablehq/{minisearch}", session))
    return {"source": source, "index": index}


def get_minisearch_index_vp(
    ref: str,
    source: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> dict:
    """
    Get the MiniSearch index of a VitePress site.

    The @localSearchIndexroot.<hash>.js module is referenced through
    theme.<hash>.js and VPLocalSearchBox.<hash>.js.
    """
    session = session or make_session()
    theme = find_asset("theme", "js", ref, session)
    searchbox = find_asset("VPLocalSearchBox", "js", f"{ref}assets/chunks/{theme}", session)
    searchroot = find_asset("localSearchIndexroot", "js", f"{ref}assets/chunks/{searchbox}", session)
    module = fetch_text(f"{ref}assets/chunks/@{searchroot}", session)
    return {"source": source or ref, "index": parse_search_module(module)}


def aggregate(sources: list[dict] = SOURCES, session: Optional[requests.Session] = None) -> dict:
    """Fetch every site's index, keyed by site."""
    session = session or make_session()
    result = {}
    for i, site in enumerate(sources, 1):
        log(f"[{i}/{len(sources)}] {site['key']}: {site['ref']}")
        if site["kind"] == FRAMEWORK:
            result[site["key"]] = get_minisearch_index_fw(site["ref"], session)
        elif site["kind"] == VITEPRESS:
            result[site["key"]] = get_minisearch_index_vp(
                site["ref"], site.get("source"), session=session
            )
        else:
            raise SearchIndexError(f"Unknown site kind for {site['key']}: {site['kind']}")
    return result


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Combine the search indexes of several documentation sites"
    )
    parser.add_argument(
        "--only", action="append", choices=[s["key"] for s in SOURCES], metavar="KEY",
        help="Only fetch this site (repeatable)"
    )
    parser.add_argument(
        "-o", "--output",
        help="Write the JSON to this file instead of stdout"
    )
    parser.add_argument(
        "--indent", type=int, default=None,
        help="Pretty-print with this indent (default: compact)"
    )
    args = parser.parse_args(argv)

    sources = [s for s in SOURCES if not args.only or s["key"] in args.only]

    try:
        result = aggregate(sources)
    except (SearchIndexError, requests.exceptions.RequestException, ValueError) as e:
        log(f"ERROR: {e}")
        return 1

    separators = None if args.indent is not None else (",", ":")
    output = json.dumps(result, ensure_ascii=False, indent=args.indent, separators=separators)
    output = escape_surrogates(output)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        log(f"Output: {args.output}")
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
