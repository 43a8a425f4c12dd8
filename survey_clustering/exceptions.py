"""Exceptions raised by the clustering engine."""


class ConfigurationError(ValueError):
    """
    Raised when the engine is asked to run with an invalid setup.

    Covers invalid k, empty datasets, missing question types, and missing
    numeric ranges or ordinal orderings for a column that needs them.
    """
