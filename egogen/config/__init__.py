from .settings import GeneratorConfig, DEFAULT_TOOL_NAME
from .loader import load_and_merge_configs, build_config

__all__ = ["GeneratorConfig", "DEFAULT_TOOL_NAME", "load_and_merge_configs", "build_config"]
