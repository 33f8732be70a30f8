"""
Directions fetcher: one GET against the Google Directions JSON endpoint.

No retries and no caching. A request timeout is applied from settings.
"""

import httpx
from typing import Any, Dict, List, Optional

from app.core.config import get_settings
from app.core.errors import UpstreamError
from app.core.logger import logger

# Google answers HTTP 200 for these; anything else in `status` is a failure
_SUCCESS_STATUSES = {"OK", "ZERO_RESULTS"}


def _decode_error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return {"error": resp.text or f"Upstream responded {resp.status_code}"}


class DirectionsClient:
    """Thin async client for the routing provider."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.transport = transport

    @classmethod
    def from_settings(cls) -> "DirectionsClient":
        settings = get_settings()
        return cls(
            api_key=settings.GOOGLE_MAPS_API_KEY,
            base_url=settings.DIRECTIONS_URL,
            timeout_s=settings.UPSTREAM_TIMEOUT_S,
        )

    async def fetch_payload(
        self,
        origin: str,
        destination: str,
        *,
        alternatives: bool = True,
    ) -> Dict[str, Any]:
        """Return the provider's decoded JSON, raising UpstreamError on any failure."""
        params = {
            "origin": origin,
            "destination": destination,
            "departure_time": "now",
            "alternatives": "true" if alternatives else "false",
            "key": self.api_key,
        }

        logger.info(
            "Requesting directions {!r} -> {!r} (alternatives={})",
            origin,
            destination,
            alternatives,
        )

        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            try:
                resp = await client.get(self.base_url, params=params)
                resp.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.warning("Directions provider returned HTTP {}", e.response.status_code)
                raise UpstreamError(
                    f"Directions provider returned HTTP {e.response.status_code}",
                    status_code=e.response.status_code,
                    body=_decode_error_body(e.response),
                ) from e
            except httpx.RequestError as e:
                logger.error("Directions provider unreachable: {}", e)
                raise UpstreamError(f"Directions provider unreachable: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Directions provider sent a non-JSON body")
            raise UpstreamError("Directions provider sent a non-JSON body") from e

        if not isinstance(data, dict):
            raise UpstreamError("Directions provider sent an unexpected payload")

        status = data.get("status", "OK")
        if status not in _SUCCESS_STATUSES:
            logger.warning(
                "Directions provider status {}: {}",
                status,
                data.get("error_message", ""),
            )
            raise UpstreamError(
                f"Directions provider status {status}",
                status_code=502,
                body=data,
            )

        return data

    async def fetch(self, origin: str, destination: str) -> List[Dict[str, Any]]:
        """Fetch the raw route alternatives (possibly empty)."""
        data = await self.fetch_payload(origin, destination, alternatives=True)
        routes = data.get("routes")
        if not isinstance(routes, list):
            return []
        logger.info("Directions provider returned {} route(s)", len(routes))
        return routes


def get_directions_client() -> DirectionsClient:
    """FastAPI dependency; overridden in tests."""
    return DirectionsClient.from_settings()
