from dataclasses import dataclass
from typing import Optional
import structlog

log = structlog.get_logger(__name__)

DEFAULT_TOOL_NAME = "ego"

@dataclass
class GeneratorConfig:
    # holds all configuration parameters for a single generation run.
    tool_name: str = DEFAULT_TOOL_NAME
    package_name: Optional[str] = None
    line_markers: bool = False
    normalize: bool = True

    def __post_init__(self):
        # an empty tool name would produce a banner without attribution.
        if not self.tool_name:
            log.warning("empty_tool_name_falling_back", default=DEFAULT_TOOL_NAME)
            self.tool_name = DEFAULT_TOOL_NAME
