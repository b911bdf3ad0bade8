"""
Fixture error hierarchy.

FormatError covers every malformed fixture source: bad YAML, a deprecated
extension, a bad legacy line, a duplicate legacy key, a broken template.
It is always fatal to the load it occurs in.
"""


class FixtureError(Exception):
    """Base class for fixture loading errors."""


class FormatError(FixtureError):
    """A fixture source file could not be parsed."""
