from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from typing import Optional

from app.core.errors import UpstreamError, ValidationError, require_locations
from app.core.logger import logger
from app.schemas.route import ErrorResponse, RoutesResponse
from app.services.directions_client import DirectionsClient, get_directions_client
from app.services.route_service import annotate_best_route, enrich_routes
from app.services.time_format import FormatOptions

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "origin or destination missing"},
    500: {"model": ErrorResponse, "description": "Routing provider failure"},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _upstream_failure(e: UpstreamError, fallback: str) -> JSONResponse:
    """Forward the provider's own status and body when it sent one."""
    if e.is_structured:
        return JSONResponse(status_code=e.status_code, content=e.body)
    return _error(500, fallback)


@router.get("/routes", response_model=RoutesResponse, responses=_ERROR_RESPONSES)
async def routes_endpoint(
    origin: Optional[str] = Query(None, description="Address, place ID or 'lat,lng'"),
    destination: Optional[str] = Query(None, description="Address, place ID or 'lat,lng'"),
    time_zone: Optional[str] = Query(None, alias="timeZone", description="IANA zone, e.g. 'Africa/Accra'"),
    locale: Optional[str] = Query(None, description="Locale tag, e.g. 'en-GB'"),
    use_12_hour: bool = Query(False, alias="use12Hour"),
    client: DirectionsClient = Depends(get_directions_client),
):
    """
    Compare the provider's route alternatives between two points.

    Routes come back fastest first, each with an estimated arrival time and
    a traffic severity. Routes without a known duration are listed last.
    """
    try:
        origin, destination = require_locations(origin, destination)
    except ValidationError as e:
        logger.info("Rejected /routes request: {}", e.message)
        return _error(400, e.message)

    options = FormatOptions(time_zone=time_zone, locale=locale, use_12_hour=use_12_hour)

    try:
        alternatives = await client.fetch(origin, destination)
        routes = enrich_routes(alternatives, origin, destination, options)
    except UpstreamError as e:
        logger.warning("Route comparison failed: {}", e.message)
        return _upstream_failure(e, "Failed to fetch routes")
    except Exception:
        logger.exception("Unexpected error while building routes")
        return _error(500, "Failed to fetch routes")

    return RoutesResponse(routes=routes)


@router.get("/directions", responses=_ERROR_RESPONSES)
async def directions_endpoint(
    origin: Optional[str] = Query(None),
    destination: Optional[str] = Query(None),
    time_zone: Optional[str] = Query(None, alias="timeZone"),
    locale: Optional[str] = Query(None),
    use_12_hour: bool = Query(False, alias="use12Hour"),
    client: DirectionsClient = Depends(get_directions_client),
):
    """
    Raw provider directions for the single best route, with `arrival_time`
    and `traffic` added to the first route.
    """
    try:
        origin, destination = require_locations(origin, destination)
    except ValidationError as e:
        logger.info("Rejected /directions request: {}", e.message)
        return _error(400, e.message)

    options = FormatOptions(time_zone=time_zone, locale=locale, use_12_hour=use_12_hour)

    try:
        payload = await client.fetch_payload(origin, destination, alternatives=False)
        return annotate_best_route(payload, options)
    except UpstreamError as e:
        logger.warning("Directions lookup failed: {}", e.message)
        return _upstream_failure(e, "Failed to fetch directions")
    except Exception:
        logger.exception("Unexpected error while annotating directions")
        return _error(500, "Failed to fetch directions")
