"""Paragraph translation route.

- POST /translate {text, lang}

503 when no provider key is configured (checked before the body),
400 when text is missing, 500 when the provider call fails.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from api.dependencies import enforce_rate_limit, get_translation_service, get_usage_ledger
from api.models import TokenUsage, TranslateRequest, TranslateResponse
from domain.model.errors import (
    TranslationError,
    TranslationInputError,
    TranslationUnavailableError,
)
from domain.model.language import DEFAULT_TRANSLATION_LANGUAGE, resolve_language
from services.translation_service import TranslationService
from services.usage_ledger import UsageLedger

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reader"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"translation": None, "error": message})


async def _read_body(request: Request) -> TranslateRequest:
    try:
        payload = await request.json()
    except ValueError:
        return TranslateRequest()
    if not isinstance(payload, dict):
        return TranslateRequest()
    return TranslateRequest(
        text=payload.get("text") if isinstance(payload.get("text"), str) else None,
        lang=payload.get("lang") if isinstance(payload.get("lang"), str) else None,
    )


@router.post(
    "/translate",
    response_model=TranslateResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_rate_limit)],
)
async def translate_text(
    request: Request,
    service: TranslationService = Depends(get_translation_service),
    ledger: UsageLedger = Depends(get_usage_ledger),
):
    """Translate text into the requested language (no fallback)."""
    try:
        service.ensure_available()
        body = await _read_body(request)
        result = await service.translate(
            body.text,
            resolve_language(body.lang, DEFAULT_TRANSLATION_LANGUAGE),
        )
    except TranslationUnavailableError as e:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(e))
    except TranslationInputError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except TranslationError as e:
        logger.error("[translate] %s", e)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "Translation failed")

    ledger.record(result.usage)
    return TranslateResponse(
        translation=result.translation,
        usage=TokenUsage.from_domain(result.usage),
    )
