"""Output formatting configuration for the query layer and the CLI."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class FormatConfig:
    """Number of digits after the decimal point when printing results."""

    precision: int = 6

    def __post_init__(self) -> None:
        if self.precision < 0:
            raise ValueError("precision must be non-negative")


_FORMAT_CONFIG = FormatConfig()


def get_format_config() -> FormatConfig:
    return copy.deepcopy(_FORMAT_CONFIG)


def set_format_config(config: FormatConfig) -> None:
    global _FORMAT_CONFIG
    _FORMAT_CONFIG = copy.deepcopy(config)
