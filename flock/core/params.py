import math
from dataclasses import dataclass, fields

from .errors import InvalidConfigurationError


NEIGHBOR_SEARCH_MODES = ("brute", "grid")


def _require_finite(name: str, value: float):
    if not math.isfinite(value):
        raise InvalidConfigurationError(f"{name} must be finite, got {value!r}")


def _as_float(name: str, value) -> float:
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}") from None


def as_count(name: str, value) -> int:
    """Accept integral numbers (including 10.0 or "10") as a non-negative count."""
    number = _as_float(name, value)
    if not number.is_integer():
        raise InvalidConfigurationError(f"{name} must be a whole number, got {value!r}")
    if number < 0:
        raise InvalidConfigurationError(f"{name} must be non-negative, got {value!r}")
    return int(number)


@dataclass(frozen=True)
class WorldBounds:
    """Centered rectangle [-width/2, width/2] x [-height/2, height/2]."""
    width: float
    height: float

    def __post_init__(self):
        for name in ("width", "height"):
            value = _as_float(name, getattr(self, name))
            _require_finite(name, value)
            if value <= 0:
                raise InvalidConfigurationError(f"bounds {name} must be positive, got {value}")
            object.__setattr__(self, name, value)

    @property
    def half_extents(self) -> tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    def contains(self, pos) -> bool:
        hw, hh = self.half_extents
        return -hw <= pos[0] <= hw and -hh <= pos[1] <= hh


@dataclass(frozen=True)
class FlockParams:
    coherence_weight: float = 1.0
    separation_weight: float = 1.0
    separation_distance: float = 30.0
    alignment_weight: float = 1.0
    base_speed: float = 200.0
    min_speed: float = 100.0
    max_speed: float = 300.0
    # when set, only alignment is scaled by the tick's dt
    alignment_time_scaled: bool = True
    neighbor_search: str = "brute"

    def __post_init__(self):
        # YAML may hand over ints or numeric strings; store plain floats
        for f in fields(self):
            if f.type in (float, "float"):
                object.__setattr__(self, f.name, _as_float(f.name, getattr(self, f.name)))
        if not isinstance(self.alignment_time_scaled, bool):
            raise InvalidConfigurationError(
                f"alignment_time_scaled must be a boolean, got {self.alignment_time_scaled!r}"
            )
        self.validate()

    def validate(self):
        """Fail fast on values that would make a tick undefined."""
        for f in fields(self):
            if f.type in (float, "float"):
                _require_finite(f.name, _as_float(f.name, getattr(self, f.name)))
        if self.min_speed < 0 or self.max_speed < 0:
            raise InvalidConfigurationError(
                f"speed bounds must be non-negative, got min={self.min_speed} max={self.max_speed}"
            )
        if self.min_speed > self.max_speed:
            raise InvalidConfigurationError(
                f"min_speed ({self.min_speed}) exceeds max_speed ({self.max_speed})"
            )
        if self.base_speed <= 0:
            raise InvalidConfigurationError(f"base_speed must be positive, got {self.base_speed}")
        if self.separation_distance < 0:
            raise InvalidConfigurationError(
                f"separation_distance must be non-negative, got {self.separation_distance}"
            )
        if self.neighbor_search not in NEIGHBOR_SEARCH_MODES:
            raise InvalidConfigurationError(
                f"neighbor_search must be one of {NEIGHBOR_SEARCH_MODES}, got {self.neighbor_search!r}"
            )
