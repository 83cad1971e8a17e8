# egogen/config/loader.py
"""
Handles loading and merging generator configuration from TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import fields as dataclass_fields
import structlog

from egogen.exceptions import ConfigError

from .settings import GeneratorConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".egogen.toml", "egogen.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "egogen"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_GENERATORCONFIG_ATTR_MAP: Dict[str, str] = {
    "tool_name": "tool_name",
    "package": "package_name",
    "package_name": "package_name",
    "line_markers": "line_markers",
    "normalize": "normalize",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {file_path}: {e}") from e
    return data.get("tool", {}).get("egogen", {}) if file_path.name == "pyproject.toml" else data

def load_and_merge_configs(cwd: Optional[Path] = None) -> Dict[str, Any]:
    # user-global settings first, then the first project file found wins over them.
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    base = cwd or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base / filename
        if candidate.is_file():
            project_settings = _load_toml_file_data(candidate)
            if project_settings:
                log.info("loading_project_local_config", path=str(candidate))
                merged_toml_data.update(project_settings)
                break
    if not merged_toml_data: log.debug("no_configuration_files_loaded")
    return merged_toml_data

def build_config(raw: Dict[str, Any], **overrides: Any) -> GeneratorConfig:
    """Builds a GeneratorConfig from raw TOML data plus explicit overrides.

    Overrides whose value is None are treated as "not given" so CLI flags
    left at their defaults do not clobber file settings.
    """
    options: Dict[str, Any] = {}
    for toml_key, value in raw.items():
        attr = CONFIG_KEY_TO_GENERATORCONFIG_ATTR_MAP.get(toml_key)
        if attr is None:
            log.warning("unknown_config_key_ignored", key=toml_key)
            continue
        options[attr] = value

    valid_fields = {f.name for f in dataclass_fields(GeneratorConfig)}
    for attr, value in overrides.items():
        if attr not in valid_fields:
            raise ConfigError(f"Unknown configuration option: {attr}")
        if value is not None:
            options[attr] = value

    for attr in ("line_markers", "normalize"):
        if attr in options and not isinstance(options[attr], bool):
            raise ConfigError(f"Configuration option '{attr}' must be a boolean, got {options[attr]!r}")
    for attr in ("tool_name", "package_name"):
        if attr in options and options[attr] is not None and not isinstance(options[attr], str):
            raise ConfigError(f"Configuration option '{attr}' must be a string, got {options[attr]!r}")

    log.debug("generator_config_built", options=options)
    return GeneratorConfig(**options)
