# egogen/manifest.py
"""
Loads a block manifest: the scanner's finished output serialized as JSON.

    {
      "name": "views",
      "templates": [
        {"path": "index.ego",
         "blocks": [{"kind": "declaration", "content": "func Index(c *Context)", "line": 1},
                    {"kind": "text", "content": "<h1>Hi</h1>", "line": 2}]}
      ]
    }
"""
import json
from pathlib import Path
from typing import Any, Dict, List
import structlog

from egogen.core.blocks import Block, BlockKind
from egogen.core.package import Package
from egogen.core.position import Pos
from egogen.core.template import Template
from egogen.exceptions import ManifestError

log = structlog.get_logger(__name__)


def _require(obj: Dict[str, Any], key: str, expected: type, where: str) -> Any:
    if key not in obj:
        raise ManifestError(f"{where}: missing '{key}'")
    value = obj[key]
    if not isinstance(value, expected):
        raise ManifestError(f"{where}: '{key}' must be {expected.__name__}, got {type(value).__name__}")
    return value


def _block_from_dict(data: Any, template_path: str, index: int) -> Block:
    where = f"{template_path}: block {index}"
    if not isinstance(data, dict):
        raise ManifestError(f"{where}: expected an object")
    kind_str = _require(data, "kind", str, where)
    try:
        kind = BlockKind.from_string(kind_str)
    except ValueError:
        raise ManifestError(f"{where}: unknown block kind '{kind_str}'") from None
    content = _require(data, "content", str, where)
    line = data.get("line", 0)
    if isinstance(line, bool) or not isinstance(line, int) or line < 0:
        raise ManifestError(f"{where}: 'line' must be a non-negative integer")
    return Block(kind, content, Pos(template_path, line))


def _template_from_dict(data: Any, index: int) -> Template:
    if not isinstance(data, dict):
        raise ManifestError(f"template {index}: expected an object")
    path = _require(data, "path", str, f"template {index}")
    raw_blocks = _require(data, "blocks", list, path)
    blocks: List[Block] = [_block_from_dict(b, path, i) for i, b in enumerate(raw_blocks)]
    return Template(path=path, blocks=blocks)


def package_from_dict(data: Any) -> Package:
    if not isinstance(data, dict):
        raise ManifestError("manifest: expected a JSON object at top level")
    name = data.get("name", "")
    if not isinstance(name, str):
        raise ManifestError("manifest: 'name' must be str")
    raw_templates = _require(data, "templates", list, "manifest")
    templates = [_template_from_dict(t, i) for i, t in enumerate(raw_templates)]
    log.debug("manifest_parsed", package=name, templates=len(templates))
    return Package(name=name, templates=templates)


def load_manifest(path: Path) -> Package:
    log.info("loading_block_manifest", path=str(path))
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"{path}: invalid JSON: {e}") from e
    except OSError as e:
        raise ManifestError(f"{path}: cannot read manifest: {e}") from e
    return package_from_dict(data)
