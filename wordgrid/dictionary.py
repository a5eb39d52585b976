from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path

from wordgrid.errors import EmptyLexicon, LexiconNotReady
from wordgrid.lexicon import Lexicon

logger = logging.getLogger("wordgrid")


def read_words(path: str | Path) -> list[str]:
    """Read a newline-separated word list, one token per line."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def load_lexicon(path: str | Path) -> Lexicon:
    lexicon = Lexicon.build(read_words(path))
    if lexicon.is_empty:
        raise EmptyLexicon(f"No usable words in dictionary {path}")
    return lexicon


class LexiconGate:
    """One-shot initialization of the process-wide lexicon.

    The first call to :meth:`load` builds it; later calls return the same
    instance. :meth:`get` refuses to hand out anything before that.
    """

    def __init__(self):
        self._lexicon: Lexicon | None = None
        self._lock = threading.Lock()

    @property
    def ready(self) -> bool:
        return self._lexicon is not None

    def load(self, path: str | Path) -> Lexicon:
        with self._lock:
            if self._lexicon is None:
                logger.info("Loading dictionary from %s", path)
                self._lexicon = load_lexicon(path)
            return self._lexicon

    async def load_async(self, path: str | Path) -> Lexicon:
        return await asyncio.to_thread(self.load, path)

    def get(self) -> Lexicon:
        if self._lexicon is None:
            raise LexiconNotReady("Dictionary has not been loaded yet")
        return self._lexicon
