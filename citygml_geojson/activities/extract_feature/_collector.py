"""lxml parser target that harvests generic attributes and position lists.

The collector receives ``start``/``end``/``data`` callbacks while lxml
parses one fragment. Text is accumulated into a single "current value"
buffer only while a ``stringAttribute``, ``intAttribute``,
``doubleAttribute`` or ``posList`` element is open; the buffer is
consumed and cleared when that element closes.

Elements are recognised by local name, so any namespace prefix works.
Everything else is traversed for nesting and otherwise ignored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from citygml_geojson.activities.extract_feature._values import (
    parse_float,
    parse_int,
    parse_pos_list,
)
from citygml_geojson.core.constants import (
    ATTRIBUTE_NAME_KEY,
    DOUBLE_ATTRIBUTE_TAG,
    INT_ATTRIBUTE_TAG,
    POS_LIST_TAG,
    STRING_ATTRIBUTE_TAG,
    VALUE_TAG,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from citygml_geojson.models.feature import PropertyValue

_ATTRIBUTE_TAGS = frozenset({STRING_ATTRIBUTE_TAG, INT_ATTRIBUTE_TAG, DOUBLE_ATTRIBUTE_TAG})
_CAPTURING_TAGS = _ATTRIBUTE_TAGS | {POS_LIST_TAG}


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` part of an lxml tag name."""
    return tag.rpartition("}")[2]


class AttributeCollector:
    """Parser target building a property mapping and HK80 coordinate pairs.

    Attributes:
        properties: Property name → typed value, in document order.
        pairs: ``(easting, northing)`` pairs from every ``posList``.
        rejected_values: Number of int/double values that failed to parse.
    """

    def __init__(self) -> None:
        self.properties: dict[str, PropertyValue] = {}
        self.pairs: list[tuple[float, float]] = []
        self.rejected_values = 0
        self._open: set[str] = set()
        self._key = ""
        self._value: list[str] = []
        self._pending: list[str] = []

    # -----------------------------------------------------------------------
    # lxml target interface
    # -----------------------------------------------------------------------

    def start(self, tag: str, attrib: Mapping[str, str]) -> None:
        self._flush_text()
        kind = local_name(tag)
        if kind in _ATTRIBUTE_TAGS:
            self._open.add(kind)
            if ATTRIBUTE_NAME_KEY in attrib:
                self._key = attrib[ATTRIBUTE_NAME_KEY]
        elif kind == POS_LIST_TAG:
            self._open.add(kind)
            self._value.clear()

    def end(self, tag: str) -> None:
        self._flush_text()
        kind = local_name(tag)
        if kind == VALUE_TAG or kind not in _CAPTURING_TAGS:
            return

        text = "".join(self._value)
        if kind == STRING_ATTRIBUTE_TAG:
            self.properties[self._key] = text
        elif kind == INT_ATTRIBUTE_TAG:
            self._store(parse_int(text))
        elif kind == DOUBLE_ATTRIBUTE_TAG:
            self._store(parse_float(text))
        else:
            self.pairs.extend(parse_pos_list(text))

        self._open.discard(kind)
        self._value.clear()

    def data(self, text: str) -> None:
        self._pending.append(text)

    def close(self) -> AttributeCollector:
        self._flush_text()
        return self

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _store(self, value: PropertyValue) -> None:
        if value is None:
            self.rejected_values += 1
            return
        self.properties[self._key] = value

    def _flush_text(self) -> None:
        """Commit the character data seen since the last tag as one trimmed run."""
        if not self._pending:
            return
        run = "".join(self._pending).strip()
        self._pending.clear()
        if run and self._open:
            self._value.append(run)
