"""
Conversion Config - Settings for a conversion run, loadable from YAML
"""

import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError
from .quantizer import MAX_PALETTE_COLORS

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class ConvertConfig:
    """Settings for one GIF to asset conversion"""

    input_path: str = "convert.gif"
    output_path: str = "data.nut"

    # Palette size after quantization (the symbol alphabet caps it at 64)
    max_colors: int = MAX_PALETTE_COLORS

    # Emit the FRAME_COUNT line
    include_frame_count: bool = True

    log_level: str = "WARNING"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConvertConfig':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        config = cls(**filtered)
        config.validate()
        return config

    def validate(self) -> None:
        if isinstance(self.max_colors, bool) or not isinstance(self.max_colors, int):
            raise ConfigError(f"max_colors must be an integer, got {self.max_colors!r}")
        if not 1 <= self.max_colors <= MAX_PALETTE_COLORS:
            raise ConfigError(
                f"max_colors must be between 1 and {MAX_PALETTE_COLORS}, got {self.max_colors}"
            )
        if not isinstance(self.include_frame_count, bool):
            raise ConfigError(
                f"include_frame_count must be true or false, got {self.include_frame_count!r}"
            )
        if not self.input_path or not self.output_path:
            raise ConfigError("input_path and output_path must not be empty")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigError(
                f"Unknown log_level '{self.log_level}'. Available: {', '.join(LOG_LEVELS)}"
            )

    @property
    def log_level_value(self) -> int:
        return getattr(logging, str(self.log_level).upper())


def load_config(path) -> ConvertConfig:
    """Load a config from a YAML file"""
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        return ConvertConfig.from_dict(data)
    except TypeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e


def save_config(config: ConvertConfig, path) -> Path:
    """Save a config to a YAML file"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    return path


def apply_args(config: ConvertConfig, args: Any) -> ConvertConfig:
    """
    Override config values with command line arguments that were given.

    Arguments left at None (or flags left unset) keep the config's value.
    """
    data = config.to_dict()

    if getattr(args, 'input', None):
        data['input_path'] = args.input
    if getattr(args, 'output', None):
        data['output_path'] = args.output
    if getattr(args, 'max_colors', None) is not None:
        data['max_colors'] = args.max_colors
    if getattr(args, 'no_frame_count', False):
        data['include_frame_count'] = False
    if getattr(args, 'verbose', False):
        data['log_level'] = 'DEBUG'

    return ConvertConfig.from_dict(data)
