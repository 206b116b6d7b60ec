"""FastAPI dependency injection helpers."""

import logging
import threading
from collections import OrderedDict

from fastapi import Request

from tasknotes_nlp.services.nlp_parser import NaturalLanguageParser
from tasknotes_nlp.utils.config import Config, get_config

logger = logging.getLogger(__name__)


def get_app_config() -> Config:
    """Get the loaded configuration for dependency injection.

    Example:
        @router.get("/items")
        def get_items(config: Config = Depends(get_app_config)):
            return config.nlp.language
    """
    return get_config()


class ParserCache:
    """Parsers built once per set of request options and shared afterwards.

    A parser never changes after construction, so request threads can use
    the same instance. The cache empties itself when a different Config
    object is passed in.

    Args:
        maxsize: Number of option sets to keep, least recently used dropped first
    """

    def __init__(self, maxsize: int = 32):
        self.maxsize = maxsize
        self._config: Config | None = None
        self._parsers: OrderedDict[tuple, NaturalLanguageParser] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._parsers)

    def get(self, config: Config, **overrides) -> NaturalLanguageParser:
        """Return the parser for a config and its overrides, building it on first use."""
        key = tuple(sorted(overrides.items()))
        with self._lock:
            if config is not self._config:
                self._parsers.clear()
                self._config = config
            parser = self._parsers.get(key)
            if parser is not None:
                self._parsers.move_to_end(key)
                return parser

        parser = NaturalLanguageParser.from_config(config, **overrides)
        logger.debug(f"Built parser for {dict(key)}")
        with self._lock:
            self._parsers[key] = parser
            while len(self._parsers) > self.maxsize:
                self._parsers.popitem(last=False)
        return parser


def get_parser_cache(request: Request) -> ParserCache:
    """Get the application's parser cache for dependency injection."""
    return request.app.state.parser_cache
