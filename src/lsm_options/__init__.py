"""LSM Options - configuration, serialization and compatibility checks for an LSM store."""

from .components.builtins import (
    DEFAULT_CLEANER,
    DEFAULT_COMPARER,
    DEFAULT_MERGER,
    ArchiveCleaner,
    BytewiseComparer,
    ConcatenateMerger,
    DeleteCleaner,
)
from .components.cache import Cache
from .components.checker import check
from .components.parser import parse
from .components.registry import ComponentRegistry, ParseHooks
from .components.serializer import serialize
from .components.validator import validate
from .core.errors import (
    CacheReleaseError,
    IncompatibleOptionsError,
    InvalidOptionsError,
    OptionsError,
    OptionsParseError,
    OptionsSyntaxError,
    UnknownComponentError,
)
from .core.options import NUM_LEVELS, LevelOptions, Options, ensure_defaults
from .core.types import Compression, FilterType, Ref, TableFormat

__all__ = [
    "Options",
    "LevelOptions",
    "NUM_LEVELS",
    "ensure_defaults",
    "serialize",
    "parse",
    "check",
    "validate",
    "ParseHooks",
    "ComponentRegistry",
    "Cache",
    "Ref",
    "Compression",
    "FilterType",
    "TableFormat",
    "BytewiseComparer",
    "ConcatenateMerger",
    "DeleteCleaner",
    "ArchiveCleaner",
    "DEFAULT_COMPARER",
    "DEFAULT_MERGER",
    "DEFAULT_CLEANER",
    "OptionsError",
    "OptionsSyntaxError",
    "OptionsParseError",
    "IncompatibleOptionsError",
    "InvalidOptionsError",
    "UnknownComponentError",
    "CacheReleaseError",
]
