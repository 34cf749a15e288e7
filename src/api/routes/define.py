"""Word definition route.

- GET /define?word&lang&fromLang: 1–2 short meanings of a tapped word

The word is normalized here (punctuation stripped, Latin case-folded)
before the lookup; an empty result is rejected with 400.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from api.dependencies import enforce_rate_limit, get_definition_service, get_usage_ledger
from api.models import DefineResponse, TokenUsage
from domain.model.definition import DEFINITION_SENTINEL, DefinitionRequest
from domain.model.language import (
    DEFAULT_DEFINITION_LANGUAGE,
    resolve_language,
    resolve_optional_language,
)
from services.definition_service import DefinitionService
from services.usage_ledger import UsageLedger
from utils.normalizer import normalize

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reader"])


@router.get(
    "/define",
    response_model=DefineResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_rate_limit)],
)
async def define_word(
    word: Optional[str] = Query(None, max_length=100),
    lang: Optional[str] = Query(None, description="Language of the definitions"),
    fromLang: Optional[str] = Query(None, description="Language the word is written in"),
    service: DefinitionService = Depends(get_definition_service),
    ledger: UsageLedger = Depends(get_usage_ledger),
):
    """Define a word in the requested language."""
    normalized = normalize((word or "").strip())
    if not normalized:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"word": "", "meanings": [DEFINITION_SENTINEL]},
        )

    lookup = DefinitionRequest(
        word=normalized,
        target_lang=resolve_language(lang, DEFAULT_DEFINITION_LANGUAGE),
        source_lang=resolve_optional_language(fromLang),
    )
    result = await service.resolve(lookup.word, lookup.target_lang, lookup.source_lang)
    ledger.record(result.usage)

    return DefineResponse(
        word=result.word,
        meanings=result.meanings,
        usage=TokenUsage.from_domain(result.usage),
    )
