from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from poi_graph.settings import PoiGraphSettings


# mode -> (transit weight, culture weight)
DEFAULT_MODE_WEIGHTS: dict[str, tuple[int, int]] = {
    "transit": (2, 1),
    "culture": (1, 2),
    "balanced": (1, 1),
    "connected": (1, 1),
    "hub": (3, 1),
    "corridor": (1, 3),
}

# Modes that score zero unless a hotel has both kinds of access.
DEFAULT_GATED_MODES: frozenset[str] = frozenset({"connected"})


@dataclass(frozen=True)
class OntologyConfig:
    """Thresholds and weights passed explicitly to every pipeline step."""

    transit_access_m: float = 300.0
    walkable_to_m: float = 500.0
    earth_radius_m: float = 6_371_000.0
    result_cap: int = 5
    mode_weights: Mapping[str, tuple[int, int]] = field(
        default_factory=lambda: dict(DEFAULT_MODE_WEIGHTS)
    )
    gated_modes: frozenset[str] = DEFAULT_GATED_MODES

    def __post_init__(self) -> None:
        # Read-only copies: the default instance is shared across every call.
        object.__setattr__(
            self,
            "mode_weights",
            MappingProxyType({k: tuple(v) for k, v in self.mode_weights.items()}),
        )
        object.__setattr__(self, "gated_modes", frozenset(self.gated_modes))
        if self.transit_access_m <= 0 or self.walkable_to_m <= 0:
            raise ValueError("distance thresholds must be positive")
        if self.earth_radius_m <= 0:
            raise ValueError("earth_radius_m must be positive")
        if self.result_cap < 0:
            raise ValueError("result_cap must be >= 0")
        missing = set(DEFAULT_MODE_WEIGHTS) - set(self.mode_weights)
        if missing:
            raise ValueError(f"mode_weights missing modes: {sorted(missing)}")
        unknown = set(self.gated_modes) - set(self.mode_weights)
        if unknown:
            raise ValueError(f"gated_modes reference unknown modes: {sorted(unknown)}")

    def weights_for(self, mode: str) -> tuple[int, int]:
        try:
            return self.mode_weights[mode]
        except KeyError:
            raise ValueError(f"unknown scoring mode: {mode!r}") from None

    @classmethod
    def from_settings(cls, s: PoiGraphSettings) -> OntologyConfig:
        return cls(
            transit_access_m=s.transit_access_m,
            walkable_to_m=s.walkable_to_m,
            earth_radius_m=s.earth_radius_m,
            result_cap=s.result_cap,
            mode_weights={**DEFAULT_MODE_WEIGHTS, **(s.mode_weights or {})},
            gated_modes=frozenset(s.gated_modes) if s.gated_modes is not None else DEFAULT_GATED_MODES,
        )


DEFAULT_CONFIG = OntologyConfig()
