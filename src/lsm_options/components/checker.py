"""Compatibility check between persisted options text and live options.

The comparer and merger are baked into data already on disk, so a store
must never be reopened with different ones. Names are all that is
compared; the cleaner is not checked.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.errors import IncompatibleOptionsError
from .parser import parse

if TYPE_CHECKING:
    from ..core.options import Options
    from ..core.types import Ref

logger = logging.getLogger(__name__)


def _check_name(field: str, persisted: Ref | None, live: Ref | None) -> None:
    # Absent from the file (or RocksDB's "nullptr" merger): no constraint.
    if persisted is None:
        return
    live_name = live.name if live is not None else ""
    if persisted.name != live_name:
        raise IncompatibleOptionsError(field, persisted.name, live_name)


def check(options: Options, text: str) -> None:
    """Verify text was written with the same comparer and merger as options.

    Raises:
        OptionsSyntaxError: Malformed line in text
        IncompatibleOptionsError: Comparer or merger names differ
    """
    persisted = parse(text)
    try:
        _check_name("comparer", persisted.comparer, options.comparer)
        _check_name("merger", persisted.merger, options.merger)
    finally:
        if persisted.cache is not None:
            persisted.cache.unref()
    logger.debug("Persisted options are compatible")
