from dataclasses import dataclass
from typing import TextIO


@dataclass(frozen=True)
class Pos:
    """A position in a template source file. Line numbers are 1-based."""
    path: str = ""
    line_no: int = 0

    @property
    def is_known(self) -> bool:
        return bool(self.path) and self.line_no > 0

    def write(self, buf: TextIO) -> None:
        # emits a //line directive mapping the following code back to the template.
        if self.is_known:
            buf.write(f"//line {self.path}:{self.line_no}\n")

    def __str__(self) -> str:
        if not self.is_known:
            return "<unknown>"
        return f"{self.path}:{self.line_no}"
