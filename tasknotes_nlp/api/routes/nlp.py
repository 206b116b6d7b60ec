"""Natural language parsing API routes.

Provides endpoints for:
- POST /api/nlp/parse - Parse quick-entry text into task attributes
- GET /api/nlp/languages - List supported languages
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from tasknotes_nlp.api.dependencies import ParserCache, get_app_config, get_parser_cache
from tasknotes_nlp.api.schemas import LanguageResponse, ParseRequest, ParseResponse, PreviewPartResponse
from tasknotes_nlp.locales import available_languages, is_supported_language
from tasknotes_nlp.services.preview_service import PreviewFormatter
from tasknotes_nlp.utils.config import Config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nlp", tags=["nlp"])


@router.post("/parse", response_model=ParseResponse)
def parse_text(
    request: ParseRequest,
    config: Config = Depends(get_app_config),
    parsers: ParserCache = Depends(get_parser_cache),
) -> ParseResponse:
    """Parse one line of task input.

    Request fields override the configured language and default field.
    Parsers are reused across requests with the same options.
    Returns the parsed attributes and a human-readable preview.
    """
    overrides = {}
    if request.language is not None:
        language = request.language.lower()
        if not is_supported_language(language):
            raise HTTPException(status_code=400, detail=f"Unsupported language: {request.language}")
        overrides["language_code"] = language
    if request.default_to_scheduled is not None:
        overrides["default_to_scheduled"] = request.default_to_scheduled
    if request.reference_date is not None:
        overrides["reference_date"] = request.reference_date

    parser = parsers.get(config, **overrides)
    parsed = parser.parse(request.text)
    logger.debug(f"Parsed {request.text!r} into {parsed.to_dict()}")

    formatter = PreviewFormatter(config.user_fields)
    return ParseResponse(
        result=parsed.to_dict(),
        preview=[PreviewPartResponse.from_part(part) for part in formatter.get_preview_data(parsed)],
        preview_text=formatter.get_preview_text(parsed),
    )


@router.get("/languages", response_model=list[LanguageResponse])
def list_languages() -> list[LanguageResponse]:
    """List every language with a shipped pattern table."""
    return [LanguageResponse(code=code, name=name) for code, name in available_languages()]
