"""Vanity import metadata lookup.

Hosts that serve custom import paths answer ``https://<path>?go-get=1``
with an HTML page carrying a tag like::

    <meta name="go-import" content="example.org/pkg git https://code.example.org/pkg">

``parse_metadata`` fetches that page and returns the entry whose prefix
matches the requested import path.
"""
from __future__ import annotations

import html.parser
import logging
from typing import Callable, List, NamedTuple, Optional
from urllib.error import URLError
from urllib.request import Request, urlopen

from repovendor.core.vendors.exceptions import MetadataError

logger = logging.getLogger(__name__)

USER_AGENT = "repovendor"
FETCH_TIMEOUT_SECONDS = 30.0


class ImportedRepo(NamedTuple):
    """The three values of a go-import meta tag.

    - import_prefix: import path of the repository root
    - vcs: backend kind (git, hg, bzr, ...)
    - url: repository root URL
    """

    import_prefix: str
    vcs: str
    url: str


MetadataLookup = Callable[[str], ImportedRepo]


class _GoImportParser(html.parser.HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.imports: List[ImportedRepo] = []

    def handle_starttag(self, tag, attrs):
        if tag != "meta":
            return
        attrs_dict = dict(attrs)
        if attrs_dict.get("name") != "go-import":
            return
        parts = (attrs_dict.get("content") or "").split()
        if len(parts) == 3:
            self.imports.append(ImportedRepo(*parts))


def parse_imports(document: str) -> List[ImportedRepo]:
    """Return every go-import entry found in an HTML document."""
    parser = _GoImportParser()
    parser.feed(document)
    parser.close()
    return parser.imports


def match_import(path: str, imports: List[ImportedRepo]) -> Optional[ImportedRepo]:
    """Pick the entry whose prefix is ``path`` or a parent of it.

    The longest matching prefix wins.
    """
    best: Optional[ImportedRepo] = None
    for imp in imports:
        if path == imp.import_prefix or path.startswith(imp.import_prefix + "/"):
            if best is None or len(imp.import_prefix) > len(best.import_prefix):
                best = imp
    return best


def _fetch(url: str, timeout: float) -> str:
    req = Request(url, headers={"User-Agent": USER_AGENT})
    with urlopen(req, timeout=timeout) as response:
        return response.read().decode("utf-8", errors="ignore")


def fetch_metadata_document(path: str, *, timeout: float = FETCH_TIMEOUT_SECONDS) -> str:
    """Fetch the go-get page for ``path``, trying https before http."""
    last_error: Exception | None = None
    for scheme in ("https", "http"):
        url = f"{scheme}://{path}?go-get=1"
        try:
            return _fetch(url, timeout)
        except (URLError, OSError, ValueError) as e:
            logger.debug("metadata fetch %s failed: %s", url, e)
            last_error = e
    raise MetadataError(
        f"could not fetch import metadata for {path}: {last_error}", context={"path": path}
    ) from last_error


def parse_metadata(path: str) -> ImportedRepo:
    """Resolve ``path`` to (import prefix, vcs kind, repository root).

    Raises:
        MetadataError: If the page cannot be fetched or has no matching entry
    """
    imports = parse_imports(fetch_metadata_document(path))
    found = match_import(path, imports)
    if found is None:
        raise MetadataError(f"no go-import meta tag matches {path}", context={"path": path})
    logger.debug("vanity import %s -> %s %s", found.import_prefix, found.vcs, found.url)
    return found


__all__ = [
    "ImportedRepo",
    "MetadataLookup",
    "parse_imports",
    "match_import",
    "fetch_metadata_document",
    "parse_metadata",
]
