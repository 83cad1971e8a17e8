# egogen/core/template.py
"""
A single template: one declaration block followed by any number of
header, text, code, print and write blocks. Renders to one Go function.
"""
import io
from dataclasses import dataclass, field
from typing import List, Optional, TextIO
import structlog

from egogen.core.blocks import Block, BlockKind, render_block
from egogen.core.literals import LiteralTable
from egogen.exceptions import DeclarationRequiredError

log = structlog.get_logger(__name__)


@dataclass
class Template:
    path: str
    blocks: List[Block] = field(default_factory=list)

    def declaration_block(self) -> Optional[Block]:
        for b in self.blocks:
            if b.kind is BlockKind.DECLARATION:
                return b
        return None

    def header_blocks(self) -> List[Block]:
        return [b for b in self.blocks if b.kind is BlockKind.HEADER]

    def text_blocks(self) -> List[Block]:
        return [b for b in self.blocks if b.kind is BlockKind.TEXT]

    def non_header_blocks(self) -> List[Block]:
        return [b for b in self.blocks if b.kind not in (BlockKind.DECLARATION, BlockKind.HEADER)]

    def normalize(self) -> None:
        """Joins together adjacent text blocks.

        A merged run keeps the position of its first block.
        """
        merged: List[Block] = []
        for b in self.blocks:
            if b.is_text and merged and merged[-1].is_text:
                prev = merged[-1]
                merged[-1] = Block(BlockKind.TEXT, prev.content + b.content, prev.pos)
            else:
                merged.append(b)
        if len(merged) != len(self.blocks):
            log.debug("template_normalized", template=self.path,
                      before=len(self.blocks), after=len(merged))
        self.blocks = merged

    def write(self, w: TextIO, literals: Optional[LiteralTable] = None, line_markers: bool = False) -> None:
        """Writes the template function to w.

        The function is rendered into a private buffer first; w only sees
        output once every block rendered successfully.
        """
        decl = self.declaration_block()
        if decl is None:
            raise DeclarationRequiredError(self.path)

        buf = io.StringIO()
        render_block(decl, buf, literals)
        for b in self.non_header_blocks():
            if line_markers:
                b.pos.write(buf)
            render_block(b, buf, literals)
        buf.write("}\n\n")

        w.write(buf.getvalue())
