"""Shipped language tables for the natural language parser."""

import logging
from functools import lru_cache
from importlib import resources

import yaml

from tasknotes_nlp.exceptions import UnknownLanguageError
from tasknotes_nlp.models.language import LanguageConfig

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


def _table_names() -> list[str]:
    return sorted(
        entry.name[: -len(".yaml")]
        for entry in resources.files(__name__).iterdir()
        if entry.name.endswith(".yaml")
    )


@lru_cache(maxsize=None)
def _load_table(code: str) -> LanguageConfig:
    """Read and validate one YAML table. Cached, so each file is parsed once."""
    source = resources.files(__name__).joinpath(f"{code}.yaml").read_text(encoding="utf-8")
    data = yaml.safe_load(source) or {}
    return LanguageConfig(**data)


def is_supported_language(code: str) -> bool:
    """Check whether a language table ships for the given code."""
    return code in _table_names()


def get_language_config(code: str, strict: bool = False) -> LanguageConfig:
    """Get the pattern table for a language.

    Args:
        code: Language code such as 'en' or 'de'
        strict: Raise instead of falling back to English

    Returns:
        The validated LanguageConfig

    Raises:
        UnknownLanguageError: If strict and no table exists for the code
    """
    if not is_supported_language(code):
        if strict:
            raise UnknownLanguageError(f"Unsupported language: {code}")
        logger.warning(f"No language table for '{code}', falling back to '{DEFAULT_LANGUAGE}'")
        code = DEFAULT_LANGUAGE
    return _load_table(code)


def available_languages() -> list[tuple[str, str]]:
    """List (code, display name) for every shipped language."""
    return [(code, _load_table(code).name) for code in _table_names()]
