"""Options text parser.

Reads the INI-style text produced by the serializer, as well as the OPTIONS
files written by RocksDB, whose sections and keys are translated onto the
native ones before they are applied.

Unknown sections and keys are skipped so that files written by newer or
differently configured builds can still be read.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import fields, replace
from enum import Enum

from ..core.errors import OptionsParseError, OptionsSyntaxError
from ..core.options import LevelOptions, Options
from ..core.types import Compression, FilterType, Ref, TableFormat
from .builtins import BUILTIN_CLEANERS, BUILTIN_COMPARERS, BUILTIN_MERGERS
from .cache import Cache
from .registry import Hook, ParseHooks

logger = logging.getLogger(__name__)

LEVEL_SECTION = re.compile(r'Level "(\d+)"')

# Highest index accepted in a Level section header.
MAX_LEVEL = 63

# RocksDB writes this for an unset merge operator.
NULLPTR = "nullptr"

# Legacy (RocksDB) section -> {legacy key: (native section, native key)}.
# Legacy keys missing from a table are ignored.
LEGACY_KEYS: dict[str, dict[str, tuple[str, str]]] = {
    'CFOptions "default"': {
        "comparator": ("Options", "comparer"),
        "merge_operator": ("Options", "merger"),
        "write_buffer_size": ("Options", "mem_table_size"),
        "level0_file_num_compaction_trigger": ("Options", "l0_compaction_threshold"),
        "level0_stop_writes_trigger": ("Options", "l0_stop_writes_threshold"),
        "max_bytes_for_level_base": ("Options", "lbase_max_bytes"),
        "target_file_size_base": ('Level "0"', "target_file_size"),
    },
    "DBOptions": {
        "bytes_per_sync": ("Options", "bytes_per_sync"),
        "max_open_files": ("Options", "max_open_files"),
        "max_manifest_file_size": ("Options", "max_manifest_file_size"),
        "wal_dir": ("Options", "wal_dir"),
        "max_background_compactions": ("Options", "max_concurrent_compactions"),
    },
}

Setter = Callable[..., None]


def scan(text: str) -> Iterator[tuple[str, str, str]]:
    """Yield (section, key, value) for every assignment in text.

    Legacy sections and keys are translated to their native names; legacy
    keys without a native counterpart are dropped.

    Raises:
        OptionsSyntaxError: A line is neither a section header nor key=value
    """
    section = ""
    for raw in text.split("\n"):
        line = raw.strip()
        if not line or line[0] in ";#":
            continue
        if line[0] == "[" and line[-1] == "]":
            section = line[1:-1].strip()
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            raise OptionsSyntaxError(line)
        value = value.strip()

        table = LEGACY_KEYS.get(section)
        if table is None:
            yield section, key, value
            continue
        mapped = table.get(key)
        if mapped is None:
            logger.debug(f"Ignoring unmapped legacy option {section}.{key}")
            continue
        yield mapped[0], mapped[1], value


def _parse_int(section: str, key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise OptionsParseError(section, key, value, "invalid integer") from None


def _parse_bool(section: str, key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "t", "1"):
        return True
    if lowered in ("false", "f", "0"):
        return False
    raise OptionsParseError(section, key, value, "invalid boolean")


def _parse_enum(enum_type: type[Enum], section: str, key: str, value: str) -> Enum:
    try:
        return enum_type(value)
    except ValueError:
        raise OptionsParseError(section, key, value, f"unknown {key.replace('_', ' ')}") from None


def _resolve(value: str, builtins: dict[str, object], hook: Hook | None) -> Ref | None:
    """Turn a component name into a reference.

    Built-in names resolve without hooks. Anything else goes through the
    hook, whose exceptions propagate unchanged; without a hook only the name
    is kept.
    """
    if not value:
        return None
    if value in builtins:
        return Ref(value, builtins[value])
    if hook is not None:
        return Ref(value, hook(value))
    return Ref(value)


def _int_field(attr: str) -> Setter:
    """Build a setter that stores an integer value in attr."""

    def apply(target: Options | LevelOptions, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
        setattr(target, attr, _parse_int(section, key, value))

    return apply


def _enum_field(attr: str, enum_type: type[Enum], optional: bool = False) -> Setter:
    """Build a setter that stores an enum member in attr.

    For optional fields an empty value stores None, which is how the
    serializer writes them while unset.
    """

    def apply(target: Options | LevelOptions, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
        if optional and not value:
            setattr(target, attr, None)
            return
        setattr(target, attr, _parse_enum(enum_type, section, key, value))

    return apply


def _ignore(target: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    pass


def _set_cache_size(o: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    size = _parse_int(section, key, value)
    if size < 0:
        raise OptionsParseError(section, key, value, "negative cache size")
    if o.cache is None:
        o.cache = Cache(size)


def _set_cleaner(o: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    o.cleaner = _resolve(value, BUILTIN_CLEANERS, hooks.new_cleaner if hooks else None)


def _set_comparer(o: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    o.comparer = _resolve(value, BUILTIN_COMPARERS, hooks.new_comparer if hooks else None)


def _set_merger(o: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    if value == NULLPTR:
        o.merger = None
        return
    o.merger = _resolve(value, BUILTIN_MERGERS, hooks.new_merger if hooks else None)


def _set_disable_wal(o: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    o.disable_wal = _parse_bool(section, key, value)


def _set_table_property_collectors(o: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    """Parse a bracketed, comma separated list of collector names."""
    if not (value.startswith("[") and value.endswith("]")):
        raise OptionsParseError(section, key, value, "expected a bracketed list")
    hook = hooks.new_table_property_collector if hooks else None
    names = [name.strip() for name in value[1:-1].split(",")]
    o.table_property_collectors = [_resolve(name, {}, hook) for name in names if name]


def _set_wal_dir(o: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    o.wal_dir = value


def _set_filter_policy(level: LevelOptions, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    if value == "none":
        level.filter_policy = None
        return
    level.filter_policy = _resolve(value, {}, hooks.new_filter_policy if hooks else None)


VERSION_KEYS: dict[str, Setter] = {
    "pebble_version": _ignore,
}

OPTIONS_KEYS: dict[str, Setter] = {
    "bytes_per_sync": _int_field("bytes_per_sync"),
    "cache_size": _set_cache_size,
    "cleaner": _set_cleaner,
    "comparer": _set_comparer,
    "disable_wal": _set_disable_wal,
    "l0_compaction_threshold": _int_field("l0_compaction_threshold"),
    "l0_stop_writes_threshold": _int_field("l0_stop_writes_threshold"),
    "lbase_max_bytes": _int_field("lbase_max_bytes"),
    "max_concurrent_compactions": _int_field("max_concurrent_compactions"),
    "max_manifest_file_size": _int_field("max_manifest_file_size"),
    "max_open_files": _int_field("max_open_files"),
    "mem_table_size": _int_field("mem_table_size"),
    "mem_table_stop_writes_threshold": _int_field("mem_table_stop_writes_threshold"),
    "min_compaction_rate": _int_field("min_compaction_rate"),
    "min_flush_rate": _int_field("min_flush_rate"),
    "merger": _set_merger,
    "table_format": _enum_field("table_format", TableFormat, optional=True),
    "table_property_collectors": _set_table_property_collectors,
    "wal_dir": _set_wal_dir,
}

LEVEL_KEYS: dict[str, Setter] = {
    "block_restart_interval": _int_field("block_restart_interval"),
    "block_size": _int_field("block_size"),
    "compression": _enum_field("compression", Compression),
    "filter_policy": _set_filter_policy,
    "filter_type": _enum_field("filter_type", FilterType, optional=True),
    "index_block_size": _int_field("index_block_size"),
    "target_file_size": _int_field("target_file_size"),
}


def _level(o: Options, section: str, key: str, value: str) -> LevelOptions:
    """Return the level named by a Level section, growing o.levels as needed."""
    match = LEVEL_SECTION.fullmatch(section)
    if match is None:
        raise OptionsParseError(section, key, value, "invalid level section")
    index = int(match.group(1))
    if index > MAX_LEVEL:
        raise OptionsParseError(section, key, value, f"level index above {MAX_LEVEL}")
    while len(o.levels) <= index:
        o.levels.append(LevelOptions())
    return o.levels[index]


def _apply(o: Options, section: str, key: str, value: str, hooks: ParseHooks | None) -> None:
    if section == "Version":
        table, target = VERSION_KEYS, o
    elif section == "Options":
        table, target = OPTIONS_KEYS, o
    elif section.startswith("Level "):
        table, target = LEVEL_KEYS, None
    else:
        logger.debug(f"Ignoring option in unknown section {section}.{key}")
        return

    setter = table.get(key)
    if setter is None:
        logger.debug(f"Ignoring unknown option {section}.{key}")
        return
    if target is None:
        target = _level(o, section, key, value)
    setter(target, section, key, value, hooks)


def _copy(o: Options) -> Options:
    return replace(
        o,
        levels=[replace(level) for level in o.levels],
        table_property_collectors=list(o.table_property_collectors),
    )


def parse_into(target: Options, text: str, hooks: ParseHooks | None = None) -> Options:
    """Apply options text on top of target and return it.

    The text is applied to a copy first, so target is left untouched when
    parsing fails. A cache created for the copy is released on failure;
    on success target takes ownership of it.

    Raises:
        OptionsSyntaxError: Malformed line
        OptionsParseError: Unparseable value for a known key
        Exception: Whatever a hook raises for a name it cannot resolve
    """
    scratch = _copy(target)
    committed = False
    try:
        for section, key, value in scan(text):
            _apply(scratch, section, key, value, hooks)
        committed = True
    finally:
        if not committed and scratch.cache is not None and scratch.cache is not target.cache:
            scratch.cache.unref()

    for f in fields(Options):
        setattr(target, f.name, getattr(scratch, f.name))
    return target


def parse(text: str, hooks: ParseHooks | None = None) -> Options:
    """Parse options text into new, non-defaulted options."""
    return parse_into(Options(), text, hooks)
