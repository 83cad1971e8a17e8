# egogen/core/literals.py
"""
Package-wide text literal table.

Every distinct trimmed text fragment in a package is backed by one shared
`[]byte` variable named `__<id>`. Ids are handed out in first-occurrence
order starting at 1, so the table size is bounded by the number of distinct
fragments rather than by how often they repeat.
"""
from typing import Dict, Iterable, Iterator, List, Optional, TextIO, Tuple
import structlog

from egogen.core.gostr import go_quote

log = structlog.get_logger(__name__)


def trim_text(content: str) -> str:
    # leading newlines and spaces go, trailing newlines go; trailing spaces stay.
    return content.lstrip("\n ").rstrip("\n")


class LiteralTable:
    """Maps trimmed text content to its literal id."""

    def __init__(self):
        self._ids: Dict[str, int] = {}
        self.occurrences: int = 0

    def add(self, content: str) -> Optional[int]:
        # registers one occurrence of content; returns None for empty-after-trim text.
        content = trim_text(content)
        if content == "":
            return None
        self.occurrences += 1
        if content in self._ids:
            return self._ids[content]
        literal_id = len(self._ids) + 1
        self._ids[content] = literal_id
        return literal_id

    def lookup(self, content: str) -> Optional[int]:
        return self._ids.get(trim_text(content))

    def entries(self) -> Iterator[Tuple[int, str]]:
        for content, literal_id in self._ids.items():
            yield literal_id, content

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, content: str) -> bool:
        return trim_text(content) in self._ids

    def write(self, buf: TextIO) -> None:
        """Writes the grouped `var ( ... )` declaration; nothing when empty."""
        if not self._ids:
            return
        buf.write("var (\n")
        for literal_id, content in self.entries():
            buf.write(f"\t__{literal_id} = []byte({go_quote(content)})\n")
        buf.write(")\n\n")


def build_literal_table(templates: Iterable) -> LiteralTable:
    # walks every text block of every template in declaration order.
    table = LiteralTable()
    for template in templates:
        ids: List[Optional[int]] = [table.add(b.content) for b in template.text_blocks()]
        log.debug("template_literals_collected", template=template.path,
                  text_blocks=len(ids), empty=ids.count(None))
    log.info("literal_table_built", distinct=len(table), occurrences=table.occurrences)
    return table
