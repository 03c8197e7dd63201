"""
Subscriptions router.
Subscription management and the interleaved subscription feed.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_content_filter_service, get_subscription_service
from app.config import get_settings
from app.core.exceptions import NotFoundError
from app.models.schemas import (
    ErrorResponse,
    SubscribedChannel,
    SubscribeRequest,
    SubscribeResponse,
    SubscriptionFeedResponse,
)
from app.services.content_filter import ContentFilterService
from app.services.subscriptions import SubscriptionService

router = APIRouter(prefix="/v1/subscriptions", tags=["subscriptions"])


@router.get("", response_model=List[SubscribedChannel], summary="List Subscriptions")
async def list_subscriptions(
    service: SubscriptionService = Depends(get_subscription_service),
) -> List[SubscribedChannel]:
    return service.get_subscriptions()


@router.post(
    "",
    response_model=SubscribeResponse,
    summary="Subscribe To Channel",
    responses={
        200: {"description": "Already subscribed"},
        201: {"description": "Subscription added"},
        400: {"model": ErrorResponse, "description": "Blank channel id"},
    },
)
async def subscribe(
    request: SubscribeRequest,
    response: Response,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscribeResponse:
    added = service.subscribe(request)
    response.status_code = status.HTTP_201_CREATED if added else status.HTTP_200_OK
    return SubscribeResponse(subscribed=added)


@router.delete(
    "/{channel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unsubscribe From Channel",
    responses={404: {"model": ErrorResponse, "description": "Not subscribed"}},
)
async def unsubscribe(
    channel_id: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Response:
    if not service.unsubscribe(channel_id):
        raise NotFoundError("Subscription", channel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/feed",
    response_model=SubscriptionFeedResponse,
    summary="Get Subscription Feed",
    description="""
    Latest videos from all subscribed channels.

    Channels are sampled round-robin (at least three videos per channel)
    and neighbouring videos are lightly shuffled. A channel that cannot be
    fetched is skipped; the feed is never an error.
    """,
)
async def get_subscription_feed(
    response: Response,
    limit: Optional[int] = Query(
        default=None,
        ge=1,
        description="Maximum number of videos (defaults to DEFAULT_FEED_LIMIT)",
    ),
    apply_filters: bool = Query(
        default=True,
        description="Hide videos matching the stored content filter",
    ),
    service: SubscriptionService = Depends(get_subscription_service),
    filter_service: ContentFilterService = Depends(get_content_filter_service),
) -> SubscriptionFeedResponse:
    settings = get_settings()
    effective_limit = min(limit or settings.DEFAULT_FEED_LIMIT, settings.MAX_FEED_LIMIT)

    feed = await service.get_subscription_feed(limit=effective_limit)

    filtered_count = 0
    if apply_filters and feed:
        kept = filter_service.filter_videos(feed)
        filtered_count = len(feed) - len(kept)
        feed = kept

    response.headers["Cache-Control"] = "private, max-age=30"

    return SubscriptionFeedResponse(
        items=feed,
        count=len(feed),
        filtered_count=filtered_count,
    )
