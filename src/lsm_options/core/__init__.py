"""LSM options core package."""

from .errors import (
    CacheReleaseError,
    IncompatibleOptionsError,
    InvalidOptionsError,
    OptionsError,
    OptionsParseError,
    OptionsSyntaxError,
    UnknownComponentError,
)
from .types import Compression, FilterType, Ref, TableFormat

__all__ = [
    "CacheReleaseError",
    "IncompatibleOptionsError",
    "InvalidOptionsError",
    "OptionsError",
    "OptionsParseError",
    "OptionsSyntaxError",
    "UnknownComponentError",
    "Compression",
    "FilterType",
    "Ref",
    "TableFormat",
]
