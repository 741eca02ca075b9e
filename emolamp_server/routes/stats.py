from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from ..logging_config import logger
from ..services import AppContext, get_context
from ..services.stats import reports
from ..utils import coerce_int, error_response, now_ms
from ..utils.coercion import clamp

router = APIRouter(prefix="/api/stats", tags=["stats"])


def _report(name: str, build: Callable[[], Dict[str, Any]]):
    try:
        return build()
    except Exception as exc:
        logger.exception("stats report failed", extra={"report": name})
        return error_response(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/today")
# Counts, distribution and mode ratio for the current local day
def stats_today(ctx: AppContext = Depends(get_context)):
    return _report("today", lambda: reports.today_report(ctx.log_store, ctx.tz, now_ms()))


@router.get("/emotions")
def stats_emotions(ctx: AppContext = Depends(get_context)):
    return _report("emotions", lambda: reports.emotions_report(ctx.log_store))


@router.get("/timeline")
# Last emotion per hour of today
def stats_timeline(ctx: AppContext = Depends(get_context)):
    return _report("timeline", lambda: reports.timeline_report(ctx.log_store, ctx.tz, now_ms()))


@router.get("/summary")
def stats_summary(ctx: AppContext = Depends(get_context)):
    return _report("summary", lambda: reports.summary_report(ctx.log_store, ctx.current_state))


@router.get("/recent")
def stats_recent(limit: Optional[str] = Query(default=None), ctx: AppContext = Depends(get_context)):
    settings = ctx.settings
    size = clamp(coerce_int(limit, settings.recent_default_limit), 1, settings.max_logs)
    return _report("recent", lambda: reports.recent_report(ctx.log_store, size))


@router.get("/current")
def stats_current(ctx: AppContext = Depends(get_context)):
    return _report("current", lambda: reports.current_report(ctx.current_state))


@router.get("/advanced")
# Streaks, transitions, event spacing and mode ratio over the whole log
def stats_advanced(ctx: AppContext = Depends(get_context)):
    return _report("advanced", lambda: reports.advanced_report(ctx.log_store))


@router.get("/weather-correlation")
def stats_weather_correlation(ctx: AppContext = Depends(get_context)):
    window = ctx.settings.correlation_window_minutes
    return _report("weather-correlation", lambda: reports.weather_correlation_report(ctx.log_store, window))


@router.get("/time-patterns")
def stats_time_patterns(ctx: AppContext = Depends(get_context)):
    return _report("time-patterns", lambda: reports.time_patterns_report(ctx.log_store, ctx.tz))


@router.get("/color-analysis")
def stats_color_analysis(ctx: AppContext = Depends(get_context)):
    return _report("color-analysis", lambda: reports.color_analysis_report(ctx.log_store))


@router.get("/weather")
def stats_weather(ctx: AppContext = Depends(get_context)):
    return _report("weather", lambda: reports.weather_report(ctx.log_store))


__all__ = ["router"]
