"""
Word list lookup with a lazy, load-once contract.

The word list loads at most once per dictionary. Every caller that asks
before the load finishes shares the same in-flight task. Until it resolves,
and for good if the load fails, validation is permissive (length only).
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Awaitable, Callable, Iterable, Optional, Set, Union

from ..engine.constants import MIN_WORD_LENGTH


logger = logging.getLogger(__name__)

WordLoader = Callable[[], Awaitable[Iterable[str]]]


def json_file_loader(path: Union[str, Path]) -> WordLoader:
    """Loader reading a JSON array of words from ``path``."""
    path = Path(path)

    def _read() -> Iterable[str]:
        with open(path) as f:
            words = json.load(f)
        if not isinstance(words, list):
            raise ValueError(f"Word list in {path} must be a JSON array")
        if not all(isinstance(w, str) for w in words):
            raise ValueError(f"Word list in {path} must only hold strings")
        return words

    async def _load() -> Iterable[str]:
        return await asyncio.to_thread(_read)

    return _load


class WordDictionary:
    """
    Case-insensitive word validation backed by a lazily loaded word list.

    Attributes:
        words: Upper-cased word set once loaded, None before that. An empty
            set means the load failed and validation stays permissive.
    """

    def __init__(self, loader: Optional[WordLoader] = None):
        self._loader = loader
        self._load_task: Optional[asyncio.Task] = None
        self.words: Optional[Set[str]] = None

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "WordDictionary":
        """Dictionary backed by a JSON word list file."""
        return cls(loader=json_file_loader(path))

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "WordDictionary":
        """Dictionary that is ready immediately with ``words``."""
        dictionary = cls()
        dictionary.words = {w.upper() for w in words}
        return dictionary

    @property
    def is_loaded(self) -> bool:
        return self.words is not None

    async def _load(self) -> None:
        if self._loader is None:
            logger.warning("No word list configured, using permissive validation")
            self.words = set()
            return

        try:
            words = await self._loader()
            self.words = {w.upper() for w in words}
            logger.info(f"Dictionary loaded: {len(self.words)} words")
        except Exception as e:
            logger.warning(f"Dictionary not loaded, using permissive validation: {e}")
            self.words = set()

    async def ready(self) -> None:
        """Wait until the word list has loaded (or failed to), starting the load if needed."""
        if self.words is not None:
            return
        if self._load_task is None:
            self._load_task = asyncio.create_task(self._load())
        await asyncio.shield(self._load_task)

    def _start_background_load(self) -> None:
        if self._load_task is not None or self.words is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._load_task = loop.create_task(self._load())

    def is_valid_word(self, word: str) -> bool:
        """
        Check a word without waiting for the word list.

        Words shorter than the minimum length are always rejected. The first
        call inside a running event loop starts the lazy load.
        """
        if len(word) < MIN_WORD_LENGTH:
            return False

        self._start_background_load()

        if not self.words:
            return True
        return word.upper() in self.words

    async def check(self, word: str) -> bool:
        """Check a word after the word list is ready."""
        await self.ready()
        return self.is_valid_word(word)
