"""Unit tests for the API parser cache."""

from unittest.mock import patch

from tasknotes_nlp.api.dependencies import ParserCache
from tasknotes_nlp.services.nlp_parser import NaturalLanguageParser
from tasknotes_nlp.utils.config import Config


class TestParserCache:
    """Tests for reusing parsers between requests."""

    def test_same_options_share_a_parser(self, test_config):
        """Test a second lookup with the same options returns the cached parser."""
        cache = ParserCache()

        first = cache.get(test_config, language_code="de")
        second = cache.get(test_config, language_code="de")

        assert first is second
        assert first.language.code == "de"

    def test_parser_is_built_once(self, test_config):
        """Test construction happens only on the first lookup."""
        cache = ParserCache()

        with patch.object(NaturalLanguageParser, "from_config", wraps=NaturalLanguageParser.from_config) as build:
            cache.get(test_config, default_to_scheduled=False)
            cache.get(test_config, default_to_scheduled=False)

        build.assert_called_once_with(test_config, default_to_scheduled=False)

    def test_different_options_get_different_parsers(self, test_config):
        """Test each option set has its own parser."""
        cache = ParserCache()

        scheduled = cache.get(test_config, default_to_scheduled=True)
        due = cache.get(test_config, default_to_scheduled=False)

        assert scheduled is not due
        assert len(cache) == 2

    def test_new_config_clears_cache(self, test_config):
        """Test parsers built for an old config are dropped."""
        cache = ParserCache()
        old = cache.get(test_config)

        new = cache.get(Config())

        assert new is not old
        assert len(cache) == 1

    def test_least_recently_used_is_evicted(self, test_config):
        """Test the cache stays within its size limit."""
        cache = ParserCache(maxsize=2)
        english = cache.get(test_config, language_code="en")
        cache.get(test_config, language_code="de")
        cache.get(test_config, language_code="en")
        cache.get(test_config, language_code="fr")

        assert len(cache) == 2
        assert cache.get(test_config, language_code="en") is english
