from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, Field, model_validator

from poi_graph import __version__
from poi_graph.ontology.builder import coerce_elements
from poi_graph.ontology.models import RawElement
from poi_graph.settings import settings

from .http import HttpClientFactory

logger = logging.getLogger(__name__)


class OverpassError(RuntimeError):
    """The upstream fetch failed; no partial batch is ever returned."""


# Same predicates the classifier narrows between.
_SELECTORS = (
    'node["tourism"="hotel"]',
    'way["tourism"="hotel"]',
    'node["railway"="station"]["station"="subway"]',
    'node["tourism"="museum"]',
    'way["tourism"="museum"]',
    'node["amenity"="theatre"]',
    'way["amenity"="theatre"]',
)


class BBox(BaseModel):
    """WGS84 bounding box in Overpass order."""

    south: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    west: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)
    north: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    east: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)

    @model_validator(mode="after")
    def _ordered(self) -> BBox:
        if self.south > self.north:
            raise ValueError("south must not exceed north")
        return self

    @classmethod
    def parse(cls, text: str) -> BBox:
        """Parse "south,west,north,east"; raises `ValueError` on anything else."""
        parts = [p.strip() for p in str(text).split(",")]
        if len(parts) != 4:
            raise ValueError(f"bbox needs 4 comma-separated numbers, got {text!r}")
        south, west, north, east = parts
        return cls(south=south, west=west, north=north, east=east)

    def to_ql(self) -> str:
        return ",".join(repr(v) for v in (self.south, self.west, self.north, self.east))


def build_query(bbox: str | BBox, timeout_s: int = 30) -> str:
    """Overpass QL union over `bbox` ("south,west,north,east")."""
    box = bbox if isinstance(bbox, BBox) else BBox.parse(bbox)
    body = "\n".join(f"  {sel}({box.to_ql()});" for sel in _SELECTORS)
    return f"[out:json][timeout:{timeout_s}];\n(\n{body}\n);\nout center;"


class OverpassClient:
    """Minimal Overpass API client.

    Docs: https://wiki.openstreetmap.org/wiki/Overpass_API

    One POST per call. Transport, status and decoding failures all surface
    as a single `OverpassError`.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        bbox: str | BBox | None = None,
        timeout_s: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url or settings.overpass_url
        self.bbox = bbox if isinstance(bbox, BBox) else BBox.parse(bbox or settings.bbox)
        self.timeout_s = timeout_s or settings.overpass_timeout_s
        headers = {"User-Agent": f"poi-graph/{__version__}"}
        self._client = HttpClientFactory.client(
            headers=headers,
            read_timeout_s=float(self.timeout_s) + 30.0,
            transport=transport,
        )

    async def aclose(self):
        await self._client.aclose()

    async def fetch_elements(self, bbox: str | BBox | None = None) -> list[RawElement]:
        query = build_query(bbox if bbox is not None else self.bbox, self.timeout_s)
        try:
            r = await self._client.post(self.url, data={"data": query})
            r.raise_for_status()
            payload = r.json()
        except httpx.HTTPStatusError as e:
            resp = e.response
            raise OverpassError(
                f"Overpass API error: HTTP {resp.status_code} {resp.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise OverpassError(f"Overpass API request failed: {e!r}") from e
        except ValueError as e:
            raise OverpassError("Overpass API returned a non-JSON body") from e

        if not isinstance(payload, dict):
            raise OverpassError("Overpass API returned an unexpected payload")
        items = payload.get("elements") or []
        elements = coerce_elements(x for x in items if isinstance(x, dict))
        logger.info("fetched %d elements from Overpass", len(elements))
        return elements
