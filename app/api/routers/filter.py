"""
Content filter router.
Banned word checks, filter decisions and filter preference management.
"""
from fastapi import APIRouter, Depends

from app.api.dependencies import get_content_filter_service, get_preference_repository
from app.models.schemas import (
    CandidateVideo,
    FilterDecision,
    FilterPreferences,
    TextCheckRequest,
    TextCheckResponse,
)
from app.repositories.preferences import StoredFilterPreferenceRepository
from app.services.content_filter import ContentFilterService
from app.services.matching import contains_banned_word

router = APIRouter(prefix="/v1", tags=["filter"])


@router.post(
    "/filter/check",
    response_model=TextCheckResponse,
    summary="Check Text For Banned Words",
)
async def check_text(request: TextCheckRequest) -> TextCheckResponse:
    """Run the banned word matcher against arbitrary text."""
    banned = contains_banned_word(request.text, request.banned_words, request.threshold)
    return TextCheckResponse(banned=banned)


@router.post(
    "/filter/classify",
    response_model=FilterDecision,
    summary="Classify Video",
    description="""
    Decide whether a video is hidden, using the stored filter preferences.

    Rules, first match wins: banned channel, banned word in title,
    description, channel name (with and without a " - Topic" suffix),
    then short-form content.
    """,
)
async def classify_video(
    video: CandidateVideo,
    filter_service: ContentFilterService = Depends(get_content_filter_service),
) -> FilterDecision:
    return filter_service.should_filter_video(video)


@router.get(
    "/preferences/filter",
    response_model=FilterPreferences,
    summary="Get Filter Preferences",
)
async def get_filter_preferences(
    repo: StoredFilterPreferenceRepository = Depends(get_preference_repository),
) -> FilterPreferences:
    return repo.load()


@router.put(
    "/preferences/filter",
    response_model=FilterPreferences,
    summary="Replace Filter Preferences",
)
async def put_filter_preferences(
    preferences: FilterPreferences,
    repo: StoredFilterPreferenceRepository = Depends(get_preference_repository),
) -> FilterPreferences:
    repo.save(preferences)
    return preferences
