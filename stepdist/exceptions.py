"""
Exceptions
Error types raised by the calibration engine and its helpers.
"""


class ConfigurationError(ValueError):
    """A localization bundle is missing a parameter or holds a bad value."""


class DegenerateGeometryError(ValueError):
    """A regression sample has no spread along the independent axis."""
