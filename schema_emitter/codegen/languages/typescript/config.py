"""
TypeScript-specific configuration.

Extends the base configuration with the settings the TypeScript
emitter needs handed to downstream formatters.
"""

from dataclasses import dataclass, fields
from typing import Optional

from ...core.config import EmitterConfig, Formatting

PRETTIER_PARSER = "typescript"


@dataclass(frozen=True)
class TypeScriptConfig(EmitterConfig):
    """TypeScript configuration; prettier options always use the TS parser."""

    def __post_init__(self):
        super().__post_init__()

        if self.formatting is Formatting.PRETTIER:
            prettier_config = dict(self.prettier_config)
            prettier_config["parser"] = PRETTIER_PARSER
            object.__setattr__(self, "prettier_config", prettier_config)

    @classmethod
    def from_config(cls, config: Optional[EmitterConfig] = None) -> "TypeScriptConfig":
        """Build a TypeScriptConfig from any EmitterConfig (or defaults)."""
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        values = {f.name: getattr(config, f.name) for f in fields(EmitterConfig)}
        return cls(**values)
