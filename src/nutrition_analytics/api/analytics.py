"""Analytics API endpoints with simple token auth."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from nutrition_analytics.api.serializers import (
    serialize_comparison,
    serialize_heatmap,
    serialize_metrics,
    serialize_period,
)

if TYPE_CHECKING:
    from nutrition_analytics.containers import AppContainer

router = APIRouter(tags=["analytics"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _resolve_timezone(request: Request, tz: str | None) -> str:
    container: AppContainer = request.app.state.container
    timezone_name = tz or container.settings.default_timezone
    try:
        ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown timezone '{timezone_name}'",
        ) from exc
    return timezone_name


@router.get("/periods")
async def list_periods(request: Request) -> dict[str, object]:
    """Return the selectable time periods."""
    container: AppContainer = request.app.state.container
    options = container.analytics_service.resolver.list_periods()
    return {"periods": [serialize_period(option) for option in options]}


@router.get("/users/{user_id}/analytics", dependencies=[Depends(require_api_token)])
async def user_analytics(
    user_id: UUID,
    request: Request,
    period: str = "30d",
    reference_date: date | None = None,
    tz: str | None = None,
) -> dict[str, object]:
    """Return goal achievement, consistency, streaks and insights."""
    container: AppContainer = request.app.state.container
    metrics = container.analytics_service.get_metrics(
        user_id, period, reference_date, _resolve_timezone(request, tz)
    )
    return serialize_metrics(metrics)


@router.get("/users/{user_id}/heatmap", dependencies=[Depends(require_api_token)])
async def user_heatmap(
    user_id: UUID,
    request: Request,
    period: str = "90d",
    reference_date: date | None = None,
    tz: str | None = None,
) -> dict[str, object]:
    """Return the calendar heatmap grid."""
    container: AppContainer = request.app.state.container
    grid = container.analytics_service.get_heatmap(
        user_id, period, reference_date, _resolve_timezone(request, tz)
    )
    return serialize_heatmap(grid)


@router.get("/users/{user_id}/comparison", dependencies=[Depends(require_api_token)])
async def user_comparison(  # noqa: PLR0913
    user_id: UUID,
    request: Request,
    period: str = "7d",
    metric: str = "calories",
    reference_date: date | None = None,
    tz: str | None = None,
) -> dict[str, object]:
    """Compare a period with the period right before it."""
    container: AppContainer = request.app.state.container
    result = container.analytics_service.compare_periods(
        user_id, period, metric, reference_date, _resolve_timezone(request, tz)
    )
    return serialize_comparison(result)


@router.post(
    "/users/{user_id}/cache/invalidate", dependencies=[Depends(require_api_token)]
)
async def invalidate_cache(user_id: UUID, request: Request) -> dict[str, str]:
    """Drop cached analytics after the user's logs changed."""
    container: AppContainer = request.app.state.container
    container.analytics_service.invalidate(user_id)
    return {"status": "ok"}
