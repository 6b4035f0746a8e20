"""Plan and result dataclasses shared by the batch runner and components."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from src.builders.variants.errors import MalformedRequestError


def _as_number(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise MalformedRequestError(f"{label} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MalformedRequestError(f"{label} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise MalformedRequestError(f"{label} must be finite, got {value!r}")
    return number


def _normalize_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


@dataclass(frozen=True)
class SizeStrokePlan:
    """Index-aligned target sizes and stroke widths plus an optional name."""

    sizes: Tuple[float, ...]
    strokes: Tuple[float, ...]
    custom_name: Optional[str] = None

    def __post_init__(self) -> None:
        sizes = tuple(
            _as_number(value, f"sizes[{index}]") for index, value in enumerate(self.sizes)
        )
        strokes = tuple(
            _as_number(value, f"strokes[{index}]") for index, value in enumerate(self.strokes)
        )
        if not sizes:
            raise MalformedRequestError("at least one size is required")
        if len(sizes) != len(strokes):
            raise MalformedRequestError(
                f"sizes and strokes must have the same length ({len(sizes)} != {len(strokes)})"
            )
        for index, size in enumerate(sizes):
            if size <= 0.0:
                raise MalformedRequestError(f"sizes[{index}] must be > 0, got {size!r}")
        for index, stroke in enumerate(strokes):
            if stroke < 0.0:
                raise MalformedRequestError(f"strokes[{index}] must be >= 0, got {stroke!r}")
        object.__setattr__(self, "sizes", sizes)
        object.__setattr__(self, "strokes", strokes)
        object.__setattr__(self, "custom_name", _normalize_name(self.custom_name))

    @classmethod
    def from_lists(
        cls,
        sizes: Sequence[float],
        strokes: Sequence[float],
        custom_name: Optional[str] = None,
    ) -> "SizeStrokePlan":
        return cls(sizes=tuple(sizes), strokes=tuple(strokes), custom_name=custom_name)

    def pairs(self) -> Iterator[Tuple[float, float]]:
        return iter(zip(self.sizes, self.strokes))

    def __len__(self) -> int:
        return len(self.sizes)


@dataclass(frozen=True)
class GeneratedComponent:
    """One sized, stroked, centered clone inside its square container."""

    name: str
    size: float
    stroke: float
    container: Any = field(repr=False, compare=False)
    artwork: Any = field(repr=False, compare=False)


@dataclass(frozen=True)
class VariantGroup:
    """Assembled variant set for one source icon."""

    name: str
    source_name: str
    components: Tuple[GeneratedComponent, ...]
    node: Any = field(repr=False, compare=False)

    @property
    def x(self) -> float:
        return float(self.node.x)

    @property
    def y(self) -> float:
        return float(self.node.y)

    @property
    def width(self) -> float:
        return float(self.node.width)

    @property
    def height(self) -> float:
        return float(self.node.height)


@dataclass(frozen=True)
class BuildFailure:
    source_name: str
    message: str


@dataclass
class BatchResult:
    """Outcome of one generation run; one entry per source icon."""

    groups: List[VariantGroup] = field(default_factory=list)
    failures: List[BuildFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.groups)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary_message(self) -> str:
        if self.ok:
            plural = "set" if self.succeeded == 1 else "sets"
            return f"✅ Generated {self.succeeded} component {plural}"
        return f"Generated {self.succeeded} sets, {self.failed} failed"
