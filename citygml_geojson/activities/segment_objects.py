"""Object segmenter: isolate each top-level generic city object.

Streams a GML document through an lxml pull parser and yields one
self-contained XML fragment string per top-level element whose qualified
name ends with the target suffix (``":GenericCityObject"`` by default).

Scan rules:
- Only a start tag seen *outside* an open object begins a capture; a
  matching element nested inside an open object is an ordinary
  descendant and only moves the depth counter.
- Depth is scoped to the current object; the fragment is emitted when
  it returns to zero.
- Elements outside any object are ignored.
- An XML syntax error stops the scan. It is logged, never raised, and
  every fragment completed before the error has already been yielded.
- Input bytes must be valid UTF-8. Each chunk is checked before the
  parser sees it; an invalid sequence raises InputReadError.

Fragment text:
- Tags and attributes are written as ``prefix:local``. The object's
  start tag declares every namespace in scope, and nested tags declare
  the namespaces they introduce, so the fragment parses on its own.
- Attribute values and text runs are written verbatim (unescaped, not
  re-escaped). Text runs are whitespace-trimmed; whitespace-only runs
  are dropped.
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from citygml_geojson.core.constants import GENERIC_CITY_OBJECT_SUFFIX
from citygml_geojson.core.exceptions import InputReadError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from lxml.etree import XMLPullParser, _Element

logger = logging.getLogger("citygml_geojson.activities.segment_objects")

#: Read size when streaming a document from disk.
CHUNK_SIZE = 64 * 1024

_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


@dataclass(slots=True)
class _ScanState:
    """Capture state scoped to the object currently open."""

    root: _Element | None = None
    depth: int = 0

    @property
    def inside(self) -> bool:
        return self.root is not None


class ObjectSegmenter:
    """Depth-tracking scanner producing one fragment per top-level object.

    After iteration, ``fragments`` holds the number of fragments yielded
    and ``syntax_error`` the parser message if the scan was cut short.
    """

    def __init__(self, target_suffix: str = GENERIC_CITY_OBJECT_SUFFIX) -> None:
        self.target_suffix = target_suffix
        self.fragments = 0
        self.syntax_error: str | None = None

    @property
    def truncated(self) -> bool:
        """Whether the last scan stopped on an XML syntax error."""
        return self.syntax_error is not None

    def iter_fragments(self, chunks: Iterable[bytes]) -> Iterator[str]:
        """Yield fragments from a document delivered as byte chunks."""
        from lxml import etree  # type: ignore[attr-defined]

        self.fragments = 0
        self.syntax_error = None

        parser = etree.XMLPullParser(
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
            huge_tree=False,
        )
        scan = _ScanState()
        decoder = codecs.getincrementaldecoder("utf-8")()
        has_content = False
        offset = 0

        for chunk in chunks:
            if not chunk:
                continue
            _check_utf8(decoder, chunk, offset)
            offset += len(chunk)
            has_content = has_content or bool(chunk.strip())
            try:
                parser.feed(chunk)
            except etree.XMLSyntaxError as exc:
                yield from self._drain(parser, scan)
                self._stop(exc)
                return
            yield from self._drain(parser, scan)

        _check_utf8(decoder, b"", offset, final=True)
        if not has_content:
            return

        try:
            parser.close()
        except etree.XMLSyntaxError as exc:
            yield from self._drain(parser, scan)
            self._stop(exc)
            return
        yield from self._drain(parser, scan)

    # -----------------------------------------------------------------------
    # Event handling
    # -----------------------------------------------------------------------

    def _drain(self, parser: XMLPullParser, scan: _ScanState) -> Iterator[str]:
        for event, elem in parser.read_events():
            fragment = self._handle(event, elem, scan)
            if fragment is not None:
                self.fragments += 1
                yield fragment

    def _handle(self, event: str, elem: _Element, scan: _ScanState) -> str | None:
        if not isinstance(elem.tag, str):
            return None

        if event == "start":
            if scan.inside:
                scan.depth += 1
            elif qualified_name(elem).endswith(self.target_suffix):
                scan.root = elem
                scan.depth = 1
            return None

        if not scan.inside:
            _release(elem)
            return None

        scan.depth -= 1
        if scan.depth > 0:
            return None

        root = scan.root
        scan.root = None
        fragment = render_fragment(root)  # type: ignore[arg-type]
        _release(root)  # type: ignore[arg-type]
        return fragment

    def _stop(self, exc: Exception) -> None:
        self.syntax_error = str(exc)
        position = getattr(exc, "position", None)
        logger.error(
            "XML syntax error, stopping scan | position=%s | fragments=%d | error=%s",
            position,
            self.fragments,
            exc,
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def segment_objects(
    document: str | bytes,
    *,
    target_suffix: str = GENERIC_CITY_OBJECT_SUFFIX,
    segmenter: ObjectSegmenter | None = None,
) -> Iterator[str]:
    """Lazily yield one fragment per top-level object in ``document``.

    Args:
        document: Whole GML document. Text is encoded as UTF-8.
        target_suffix: Qualified-name suffix of the object element.
        segmenter: Optional segmenter to reuse, e.g. to inspect
            ``truncated`` afterwards. Overrides ``target_suffix``.
    """
    data = document.encode("utf-8") if isinstance(document, str) else document
    segmenter = segmenter or ObjectSegmenter(target_suffix)
    return segmenter.iter_fragments(
        data[offset : offset + CHUNK_SIZE] for offset in range(0, len(data), CHUNK_SIZE)
    )


def segment_file(
    path: Path | str,
    *,
    target_suffix: str = GENERIC_CITY_OBJECT_SUFFIX,
    segmenter: ObjectSegmenter | None = None,
) -> Iterator[str]:
    """Lazily yield one fragment per top-level object in the file at ``path``.

    Raises:
        InputReadError: If the file cannot be opened or read, or its
            content is not valid UTF-8.
    """
    segmenter = segmenter or ObjectSegmenter(target_suffix)
    return segmenter.iter_fragments(_read_chunks(Path(path)))


def _read_chunks(path: Path) -> Iterator[bytes]:
    try:
        with path.open("rb") as stream:
            while chunk := stream.read(CHUNK_SIZE):
                yield chunk
    except OSError as exc:
        msg = f"Cannot read GML file {path}: {exc}"
        raise InputReadError(msg) from exc


def _check_utf8(
    decoder: codecs.IncrementalDecoder, chunk: bytes, offset: int, *, final: bool = False
) -> None:
    try:
        decoder.decode(chunk, final)
    except UnicodeDecodeError as exc:
        msg = f"GML input is not valid UTF-8 near byte {offset + exc.start}: {exc.reason}"
        raise InputReadError(msg) from exc


# ---------------------------------------------------------------------------
# Fragment rendering
# ---------------------------------------------------------------------------


def qualified_name(elem: _Element) -> str:
    """Return ``prefix:local`` (or ``local`` for an unprefixed element)."""
    from lxml import etree  # type: ignore[attr-defined]

    local = etree.QName(elem).localname
    return f"{elem.prefix}:{local}" if elem.prefix else local


def render_fragment(elem: _Element) -> str:
    """Rebuild the markup of ``elem`` and its subtree as one string."""
    parts: list[str] = []
    _render(elem, {}, parts)
    return "".join(parts)


def _render(elem: _Element, parent_nsmap: dict[str | None, str], parts: list[str]) -> None:
    name = qualified_name(elem)
    nsmap = elem.nsmap

    parts.append(f"<{name}")
    for prefix, uri in nsmap.items():
        if prefix in parent_nsmap and parent_nsmap[prefix] == uri:
            continue
        declaration = f"xmlns:{prefix}" if prefix else "xmlns"
        parts.append(f' {declaration}="{uri}"')
    for key, value in elem.attrib.items():
        parts.append(f' {_qualified_attribute(key, nsmap)}="{value}"')
    parts.append(">")

    _append_text(parts, elem.text)
    for child in elem:
        if isinstance(child.tag, str):
            _render(child, nsmap, parts)
        _append_text(parts, child.tail)

    parts.append(f"</{name}>")


def _qualified_attribute(key: str, nsmap: dict[str | None, str]) -> str:
    if not key.startswith("{"):
        return key
    uri, _, local = key[1:].partition("}")
    if uri == _XML_NAMESPACE:
        return f"xml:{local}"
    for prefix, ns_uri in nsmap.items():
        if prefix and ns_uri == uri:
            return f"{prefix}:{local}"
    return local


def _append_text(parts: list[str], text: str | None) -> None:
    if text:
        trimmed = text.strip()
        if trimmed:
            parts.append(trimmed)


def _release(elem: _Element) -> None:
    """Free a finished subtree and any already-processed siblings."""
    elem.clear()
    parent = elem.getparent()
    if parent is None:
        return
    while elem.getprevious() is not None:
        del parent[0]
