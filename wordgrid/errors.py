class WordGridError(Exception):
    """Base class for engine and host errors."""


class InvalidBoard(WordGridError, ValueError):
    """Board has the wrong shape or a cell that is not exactly one letter."""


class EmptyLexicon(WordGridError):
    """A dictionary source produced no usable words."""


class SolveCancelled(WordGridError):
    """The cancel flag was set while a search was running."""


class LexiconNotReady(WordGridError):
    """The lexicon was requested before its one-time build completed."""
