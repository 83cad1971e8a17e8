"""
Template model and Go code generation for egogen.

A Package holds Templates, a Template holds Blocks. Package.write renders the
whole package into a single Go source file.
"""
from .position import Pos
from .blocks import Block, BlockKind, render_block
from .literals import LiteralTable, build_literal_table, trim_text
from .template import Template
from .package import Package, PackageStats

__all__ = [
    "Pos",
    "Block",
    "BlockKind",
    "render_block",
    "LiteralTable",
    "build_literal_table",
    "trim_text",
    "Template",
    "Package",
    "PackageStats",
]
