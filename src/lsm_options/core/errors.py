"""Exception hierarchy for LSM options.

Defines all custom exceptions raised while defaulting, parsing, checking
and validating store options.
"""

from __future__ import annotations


class OptionsError(Exception):
    """Base exception for all options errors."""
    pass


class OptionsSyntaxError(OptionsError):
    """Raised when a line is neither a section header nor key=value."""

    def __init__(self, line: str):
        super().__init__(f"invalid key=value syntax: {line}")
        self.line = line


class OptionsParseError(OptionsError):
    """Raised when a recognized key carries a value that cannot be parsed."""

    def __init__(self, section: str, key: str, value: str, reason: str):
        super().__init__(f"[{section}] {key}={value}: {reason}")
        self.section = section
        self.key = key
        self.value = value


class IncompatibleOptionsError(OptionsError):
    """Raised when a persisted comparer or merger differs from the live one."""

    def __init__(self, field: str, file_name: str, options_name: str):
        super().__init__(
            f'{field} name from file "{file_name}" != {field} name from options "{options_name}"'
        )
        self.field = field
        self.file_name = file_name
        self.options_name = options_name


class InvalidOptionsError(OptionsError):
    """Raised when options violate one or more semantic invariants."""

    def __init__(self, violations: list[str]):
        super().__init__("\n".join(violations))
        self.violations = violations


class UnknownComponentError(OptionsError):
    """Raised when a registry has no component under the requested name."""
    pass


class CacheReleaseError(OptionsError):
    """Raised when a cache handle is released more times than it was acquired."""
    pass
