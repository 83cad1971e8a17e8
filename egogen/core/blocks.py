# egogen/core/blocks.py
"""
Template blocks: the six typed fragments a scanner hands to the generator,
and the rendering of each kind into Go source.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, TextIO

from egogen.core.gostr import go_quote_ascii
from egogen.core.literals import LiteralTable, trim_text
from egogen.core.position import Pos
from egogen.exceptions import LiteralNotAssignedError

# names provided by the runtime support library of generated code.
SINK_NAME = "c"
ESCAPE_FUNC = "Escape"


class BlockKind(Enum):
    DECLARATION = "declaration"
    HEADER = "header"
    TEXT = "text"
    CODE = "code"
    PRINT = "print"
    WRITE = "write"

    @classmethod
    def from_string(cls, s: str) -> "BlockKind":
        return cls(s.strip().lower())


@dataclass(frozen=True)
class Block:
    """One fragment of a template. Immutable once constructed."""
    kind: BlockKind
    content: str
    pos: Pos = field(default_factory=Pos)

    @classmethod
    def declaration(cls, content: str, pos: Optional[Pos] = None) -> "Block":
        return cls(BlockKind.DECLARATION, content, pos or Pos())

    @classmethod
    def header(cls, content: str, pos: Optional[Pos] = None) -> "Block":
        return cls(BlockKind.HEADER, content, pos or Pos())

    @classmethod
    def text(cls, content: str, pos: Optional[Pos] = None) -> "Block":
        return cls(BlockKind.TEXT, content, pos or Pos())

    @classmethod
    def code(cls, content: str, pos: Optional[Pos] = None) -> "Block":
        return cls(BlockKind.CODE, content, pos or Pos())

    @classmethod
    def print(cls, content: str, pos: Optional[Pos] = None) -> "Block":
        return cls(BlockKind.PRINT, content, pos or Pos())

    @classmethod
    def write(cls, content: str, pos: Optional[Pos] = None) -> "Block":
        return cls(BlockKind.WRITE, content, pos or Pos())

    @property
    def is_text(self) -> bool:
        return self.kind is BlockKind.TEXT


def _write_declaration(block: Block, buf: TextIO, literals: Optional[LiteralTable]) -> None:
    buf.write(f"{block.content} {{\n")

def _write_verbatim(block: Block, buf: TextIO, literals: Optional[LiteralTable]) -> None:
    buf.write(f"{block.content}\n")

def _write_text(block: Block, buf: TextIO, literals: Optional[LiteralTable]) -> None:
    content = trim_text(block.content)
    if content == "":
        return
    literal_id = literals.lookup(content) if literals is not None else None
    if literal_id is None:
        raise LiteralNotAssignedError(content)
    text = go_quote_ascii(content)[1:-1].replace("\\n", "\n\t// ")
    buf.write(f"// {text}\n")
    buf.write(f"{SINK_NAME}.Write(__{literal_id})\n")

def _write_print(block: Block, buf: TextIO, literals: Optional[LiteralTable]) -> None:
    buf.write(f"{SINK_NAME}.Write({ESCAPE_FUNC}({block.content}))\n")

def _write_raw(block: Block, buf: TextIO, literals: Optional[LiteralTable]) -> None:
    buf.write(f"{SINK_NAME}.Write({block.content})\n")


_RENDERERS: Dict[BlockKind, Callable[[Block, TextIO, Optional[LiteralTable]], None]] = {
    BlockKind.DECLARATION: _write_declaration,
    BlockKind.HEADER: _write_verbatim,
    BlockKind.TEXT: _write_text,
    BlockKind.CODE: _write_verbatim,
    BlockKind.PRINT: _write_print,
    BlockKind.WRITE: _write_raw,
}

_missing_kinds = set(BlockKind) - set(_RENDERERS)
if _missing_kinds:
    raise RuntimeError(f"no renderer registered for block kinds: {sorted(k.value for k in _missing_kinds)}")


def render_block(block: Block, buf: TextIO, literals: Optional[LiteralTable] = None) -> None:
    """Appends the Go source for a single block to buf.

    Text blocks need the package literal table; every other kind renders
    without it.
    """
    _RENDERERS[block.kind](block, buf, literals)
