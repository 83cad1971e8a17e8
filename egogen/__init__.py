"""egogen: compiles scanned ego templates into a single Go source file."""

__version__ = "0.1.0"

from egogen.core import Block, BlockKind, Package, Pos, Template
from egogen.exceptions import (
    EgoError,
    DeclarationRequiredError,
    HeaderParseError,
    PackageNameRequiredError,
)

__all__ = [
    "__version__",
    "Block",
    "BlockKind",
    "Package",
    "Pos",
    "Template",
    "EgoError",
    "DeclarationRequiredError",
    "HeaderParseError",
    "PackageNameRequiredError",
]
