"""Exceptions raised by textanchor."""


class SeekError(IndexError):
    """A seek or read ran past the start or end of its scope."""


class UnsupportedSelectorError(ValueError):
    """The selector type is unknown, or its data cannot be read as a selector."""


class DisambiguationError(RuntimeError):
    """
    No prefix or suffix can separate the target from another match.

    This only happens when the target is not part of the scope's own text.
    """
