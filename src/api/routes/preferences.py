"""Reader preference routes.

- GET /preferences
- PUT /preferences: partial update; an empty sentenceStyle clears it
"""

import logging
from fastapi import APIRouter, Depends

from api.dependencies import get_preferences_service
from api.models import PreferencesModel
from domain.model.saved_word import Preferences
from services.preferences_service import PreferencesService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _to_response(prefs: Preferences) -> PreferencesModel:
    return PreferencesModel(
        definition_language=prefs.definition_language,
        paragraph_language=prefs.paragraph_language,
        sentence_style=prefs.sentence_style,
    )


@router.get("", response_model=PreferencesModel, response_model_by_alias=True)
async def get_preferences(service: PreferencesService = Depends(get_preferences_service)):
    return _to_response(service.get())


@router.put("", response_model=PreferencesModel, response_model_by_alias=True)
async def update_preferences(
    request: PreferencesModel,
    service: PreferencesService = Depends(get_preferences_service),
):
    """Update the given preference fields; unknown language codes fall back to defaults."""
    prefs = service.update(
        definition_language=request.definition_language,
        paragraph_language=request.paragraph_language,
        sentence_style=request.sentence_style,
    )
    logger.info("Preferences updated", extra=prefs.to_dict())
    return _to_response(prefs)
