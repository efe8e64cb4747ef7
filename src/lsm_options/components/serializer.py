"""Options serializer.

Renders options as INI-style text. Key order within each section is fixed
and is part of the on-disk format; do not reorder or sort it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.options import LevelOptions, Options
    from ..core.types import Ref

FORMAT_VERSION = "0.1"


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _name(ref: Ref | None) -> str:
    return ref.name if ref is not None else ""


def _options_entries(o: Options) -> list[tuple[str, object]]:
    return [
        ("bytes_per_sync", o.bytes_per_sync),
        ("cache_size", o.cache.max_size() if o.cache is not None else 0),
        ("cleaner", _name(o.cleaner)),
        ("comparer", _name(o.comparer)),
        ("disable_wal", _bool(o.disable_wal)),
        ("l0_compaction_threshold", o.l0_compaction_threshold),
        ("l0_stop_writes_threshold", o.l0_stop_writes_threshold),
        ("lbase_max_bytes", o.lbase_max_bytes),
        ("max_concurrent_compactions", o.max_concurrent_compactions),
        ("max_manifest_file_size", o.max_manifest_file_size),
        ("max_open_files", o.max_open_files),
        ("mem_table_size", o.mem_table_size),
        ("mem_table_stop_writes_threshold", o.mem_table_stop_writes_threshold),
        ("min_compaction_rate", o.min_compaction_rate),
        ("min_flush_rate", o.min_flush_rate),
        ("merger", _name(o.merger)),
        ("table_property_collectors", "[" + ",".join(c.name for c in o.table_property_collectors) + "]"),
        ("wal_dir", o.wal_dir),
    ]


def _level_entries(level: LevelOptions) -> list[tuple[str, object]]:
    return [
        ("block_restart_interval", level.block_restart_interval),
        ("block_size", level.block_size),
        ("compression", level.compression.value),
        ("filter_policy", _name(level.filter_policy) if level.filter_policy is not None else "none"),
        ("filter_type", level.filter_type.value if level.filter_type is not None else ""),
        ("index_block_size", level.index_block_size),
        ("target_file_size", level.target_file_size),
    ]


def _section(header: str, entries: list[tuple[str, object]]) -> str:
    lines = [f"[{header}]"]
    lines.extend(f"  {key}={value}" for key, value in entries)
    return "\n".join(lines) + "\n"


def serialize(options: Options) -> str:
    """Return the canonical text form of options.

    Expects defaulted options; unset references render as empty values.
    """
    sections = [
        _section("Version", [("pebble_version", FORMAT_VERSION)]),
        _section("Options", _options_entries(options)),
    ]
    for i, level in enumerate(options.levels):
        sections.append(_section(f'Level "{i}"', _level_entries(level)))
    return "\n".join(sections)
