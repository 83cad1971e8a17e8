# egogen/core/package.py
"""
A package of templates rendered into one generated Go file.

Rendering happens in three strictly ordered stages:

1. header: banner, package clause and the merged, de-duplicated imports of
   every template's header blocks;
2. literal table: one `[]byte` variable per distinct text fragment;
3. one function per template, in declaration order.

Stages 1 and 2 are package-wide and are rendered in memory before the
destination is touched, so an invalid header anywhere in the package leaves
the destination empty.
"""
import io
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, TextIO
import structlog

from egogen.config.settings import DEFAULT_TOOL_NAME, GeneratorConfig
from egogen.core.blocks import render_block
from egogen.core.imports import ImportSpec, dedupe_imports, parse_imports_only
from egogen.core.literals import LiteralTable, build_literal_table
from egogen.core.template import Template
from egogen.exceptions import HeaderParseError, PackageNameRequiredError

log = structlog.get_logger(__name__)


def format_ansic(ts: datetime) -> str:
    # Go's time.ANSIC layout: "Mon Jan _2 15:04:05 2006".
    return f"{ts:%a %b} {ts.day:>2} {ts:%H:%M:%S %Y}"


@dataclass
class PackageStats:
    templates: int = 0
    blocks: int = 0
    literals: int = 0
    text_occurrences: int = 0
    imports: int = 0


@dataclass
class Package:
    name: str
    templates: List[Template] = field(default_factory=list)

    def normalize(self) -> None:
        for t in self.templates:
            t.normalize()

    def merged_imports(self) -> List[ImportSpec]:
        """Parses every header block in the package and returns the unique imports in order."""
        if not self.name:
            raise PackageNameRequiredError()

        buf = io.StringIO()
        buf.write(f"package {self.name}\n")
        for t in self.templates:
            for b in t.header_blocks():
                render_block(b, buf)
        source = buf.getvalue()

        try:
            parsed = parse_imports_only(source)
        except HeaderParseError as e:
            log.error("header_parse_failed", package=self.name, error=e.message, source=e.source)
            raise
        unique = dedupe_imports(parsed.imports)
        log.debug("imports_merged", package=self.name, parsed=len(parsed.imports), unique=len(unique))
        return unique

    def write_header(self, w: TextIO, tool_name: str = DEFAULT_TOOL_NAME,
                     now: Optional[datetime] = None) -> List[ImportSpec]:
        # writes the banner, package name and consolidated imports.
        imports = self.merged_imports()

        buf = io.StringIO()
        ts = now or datetime.now()
        buf.write(f"// Generated by {tool_name} on {format_ansic(ts)}.\n// DO NOT EDIT\n\n")
        buf.write(f"package {self.name}\n\n")
        if imports:
            buf.write("import (\n")
            for spec in imports:
                buf.write(f"\t{spec.render()}\n")
            buf.write(")\n\n")

        w.write(buf.getvalue())
        return imports

    def write(self, w: TextIO, config: Optional[GeneratorConfig] = None,
              now: Optional[datetime] = None) -> PackageStats:
        """Writes the package header, literal table and every template to w."""
        config = config or GeneratorConfig()
        log.info("package_render_started", package=self.name, templates=len(self.templates))

        head = io.StringIO()
        imports = self.write_header(head, tool_name=config.tool_name, now=now)
        literals = build_literal_table(self.templates)
        literals.write(head)
        w.write(head.getvalue())

        for t in self.templates:
            t.write(w, literals, line_markers=config.line_markers)
            log.debug("template_written", template=t.path)

        stats = self._stats(literals, imports)
        log.info("package_render_finished", package=self.name, literals=stats.literals, imports=stats.imports)
        return stats

    def render(self, config: Optional[GeneratorConfig] = None, now: Optional[datetime] = None) -> str:
        buf = io.StringIO()
        self.write(buf, config=config, now=now)
        return buf.getvalue()

    def stats(self) -> PackageStats:
        return self._stats(build_literal_table(self.templates), self.merged_imports())

    def _stats(self, literals: LiteralTable, imports: List[ImportSpec]) -> PackageStats:
        return PackageStats(
            templates=len(self.templates),
            blocks=sum(len(t.blocks) for t in self.templates),
            literals=len(literals),
            text_occurrences=literals.occurrences,
            imports=len(imports),
        )
