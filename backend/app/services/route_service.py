"""
Route service: Google Directions alternatives -> enriched, ranked routes.

Each alternative gains an arrival time and a traffic classification, then
the batch is sorted by travel duration. Malformed legs degrade field by
field to null/default values; they never abort the batch.
"""

import copy
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from app.core.config import get_settings
from app.core.logger import logger
from app.schemas.route import ArrivalTime, EnrichedRoute, TrafficInfo
from app.services.time_format import FormatOptions, format_arrival

LIGHT_DELAY_MAX_MIN = 5
MODERATE_DELAY_MAX_MIN = 15

# Keys assigned by the enricher; provider fields with the same name are dropped
_DERIVED_KEYS = frozenset(EnrichedRoute.model_fields)


# ──────────────────────────────────────────────
# Field extraction
# ──────────────────────────────────────────────

def finite_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None. Zero is a real value; strings are not."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def first_leg(route: Dict[str, Any]) -> Dict[str, Any]:
    legs = route.get("legs")
    if isinstance(legs, list) and legs:
        return _as_dict(legs[0])
    return {}


def _value(leg: Dict[str, Any], key: str) -> Optional[float]:
    # durations, distances and epoch timestamps are never negative
    number = finite_number(_as_dict(leg.get(key)).get("value"))
    return number if number is not None and number >= 0 else None


def _value_text(leg: Dict[str, Any], key: str) -> Optional[str]:
    return _text(_as_dict(leg.get(key)).get("text"))


# ──────────────────────────────────────────────
# Derivations
# ──────────────────────────────────────────────

def classify_traffic(
    normal_s: Optional[float],
    traffic_s: Optional[float],
    normal_text: Optional[str] = None,
    traffic_text: Optional[str] = None,
) -> TrafficInfo:
    """Bucket the in-traffic delay into clear / light / moderate / heavy."""
    has_traffic = normal_s is not None and traffic_s is not None and traffic_s > normal_s

    if not has_traffic:
        return TrafficInfo(
            has_traffic=False,
            delay_minutes=0,
            message="Clear roads - no significant delays",
            severity="clear",
            duration_in_traffic_text=traffic_text,
            normal_duration_text=normal_text,
        )

    # half-up rounding, not banker's
    delay = int(math.floor((traffic_s - normal_s) / 60 + 0.5))

    if delay <= LIGHT_DELAY_MAX_MIN:
        severity, message = "light", "Light traffic - minimal delays expected"
    elif delay <= MODERATE_DELAY_MAX_MIN:
        severity, message = "moderate", f"Moderate traffic - {delay} minutes delay"
    else:
        severity, message = "heavy", f"Heavy traffic - {delay} minutes delay"

    return TrafficInfo(
        has_traffic=True,
        delay_minutes=delay,
        message=message,
        severity=severity,
        duration_in_traffic_text=traffic_text,
        normal_duration_text=normal_text,
    )


def arrival_instant(leg: Dict[str, Any], duration_s: Optional[float], now: datetime) -> datetime:
    """
    Transit arrival timestamp if the leg has one, else now + duration,
    else now.
    """
    transit_epoch = _value(leg, "arrival_time")
    if transit_epoch is not None:
        try:
            return datetime.fromtimestamp(transit_epoch, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Ignoring out-of-range transit arrival {}", transit_epoch)

    if duration_s is not None:
        try:
            return now + timedelta(seconds=duration_s)
        except OverflowError:
            logger.debug("Ignoring out-of-range duration {}", duration_s)

    return now


def build_arrival_time(
    leg: Dict[str, Any],
    duration_s: Optional[float],
    now: datetime,
    options: FormatOptions,
) -> ArrivalTime:
    settings = get_settings()
    return format_arrival(
        arrival_instant(leg, duration_s, now),
        options,
        default_time_zone=settings.DEFAULT_TIME_ZONE,
        default_locale=settings.DEFAULT_LOCALE,
    )


def route_name(route: Dict[str, Any], index: int) -> str:
    summary = route.get("summary")
    if isinstance(summary, str) and summary.strip():
        return summary
    return f"Route {index + 1}"


# ──────────────────────────────────────────────
# Enrichment + ranking
# ──────────────────────────────────────────────

def enrich_route(
    route: Any,
    index: int,
    origin: str,
    destination: str,
    options: FormatOptions,
    now: datetime,
) -> EnrichedRoute:
    route = _as_dict(route)
    leg = first_leg(route)

    duration_s = _value(leg, "duration")
    distance_m = _value(leg, "distance")
    normal_text = _value_text(leg, "duration")

    # Step 1: provider fields carried through untouched
    passthrough = {k: v for k, v in route.items() if k not in _DERIVED_KEYS}

    # Step 2: derived fields
    start = leg.get("start_location")
    end = leg.get("end_location")
    derived = {
        "name": route_name(route, index),
        "origin": origin,
        "destination": destination,
        "distance_text": _value_text(leg, "distance"),
        "distance_meters": distance_m,
        "duration_text": normal_text,
        "duration_seconds": duration_s,
        "arrival_time": build_arrival_time(leg, duration_s, now, options),
        "traffic": classify_traffic(
            duration_s,
            _value(leg, "duration_in_traffic"),
            normal_text,
            _value_text(leg, "duration_in_traffic"),
        ),
        "start_location": start if isinstance(start, dict) else None,
        "end_location": end if isinstance(end, dict) else None,
        "polyline": _text(_as_dict(route.get("overview_polyline")).get("points")),
    }

    return EnrichedRoute(**passthrough, **derived)


def _ranking_key(route: EnrichedRoute) -> float:
    return route.duration_seconds if route.duration_seconds is not None else math.inf


def rank_routes(routes: Sequence[EnrichedRoute]) -> List[EnrichedRoute]:
    """Ascending duration; unknown durations last; ties keep input order."""
    return sorted(routes, key=_ranking_key)


def enrich_routes(
    alternatives: Sequence[Any],
    origin: str,
    destination: str,
    options: Optional[FormatOptions] = None,
    now: Optional[datetime] = None,
) -> List[EnrichedRoute]:
    """
    Full pipeline for one request: enrich every alternative, then rank.

    `now` is captured once so every route in the batch shares one clock.
    """
    options = options or FormatOptions()
    now = now or datetime.now(timezone.utc)

    enriched = [
        enrich_route(route, i, origin, destination, options, now)
        for i, route in enumerate(alternatives)
    ]
    ranked = rank_routes(enriched)

    logger.info(
        "Enriched {} route(s) for {!r} -> {!r}",
        len(ranked),
        origin,
        destination,
    )
    return ranked


def annotate_best_route(
    payload: Dict[str, Any],
    options: Optional[FormatOptions] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Return a copy of the provider payload with `arrival_time` and `traffic`
    added to its first route. Payloads without a usable first leg come back
    unchanged.
    """
    options = options or FormatOptions()
    now = now or datetime.now(timezone.utc)

    annotated = copy.deepcopy(payload)
    routes = annotated.get("routes")
    if not isinstance(routes, list) or not routes or not isinstance(routes[0], dict):
        return annotated

    route = routes[0]
    leg = first_leg(route)
    if not leg:
        return annotated

    duration_s = _value(leg, "duration")
    route["arrival_time"] = build_arrival_time(leg, duration_s, now, options).model_dump()
    route["traffic"] = classify_traffic(
        duration_s,
        _value(leg, "duration_in_traffic"),
        _value_text(leg, "duration"),
        _value_text(leg, "duration_in_traffic"),
    ).model_dump()
    return annotated
