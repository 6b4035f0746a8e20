from __future__ import annotations

import math
from typing import List, Optional
from typing_extensions import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.builders.variants.plan_types import SizeStrokePlan


# =========================
# Inbound (UI -> core)
# =========================

class GenerateRequest(BaseModel):
    """
    Generation request sent by the panel.
    sizes[i] is paired with strokes[i]; customName overrides set names.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["generate"] = "generate"

    sizes: List[float] = Field(min_length=1)
    strokes: List[float] = Field(min_length=1)
    custom_name: Optional[str] = Field(default=None, alias="customName")

    @field_validator("sizes")
    @classmethod
    def validate_sizes(cls, v: List[float]):
        for index, size in enumerate(v):
            if not math.isfinite(size) or size <= 0:
                raise ValueError(f"sizes[{index}] must be a positive number")
        return v

    @field_validator("strokes")
    @classmethod
    def validate_strokes(cls, v: List[float]):
        for index, stroke in enumerate(v):
            if not math.isfinite(stroke) or stroke < 0:
                raise ValueError(f"strokes[{index}] must be a non-negative number")
        return v

    @field_validator("custom_name", mode="before")
    @classmethod
    def _v_custom_name(cls, v):
        # Empty name means "keep source names".
        if v is None:
            return None
        stripped = str(v).strip()
        return stripped or None

    @model_validator(mode="after")
    def validate_pairs(self):
        if len(self.sizes) != len(self.strokes):
            raise ValueError(
                f"sizes and strokes must have the same length ({len(self.sizes)} != {len(self.strokes)})"
            )
        return self

    def to_plan(self) -> SizeStrokePlan:
        return SizeStrokePlan.from_lists(self.sizes, self.strokes, self.custom_name)


# =========================
# Outbound (core -> UI)
# =========================

class SelectionStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["selection-status"] = "selection-status"

    has_valid_selection: bool = Field(alias="hasValidSelection")
    count: int = Field(ge=0)
    icon_names: List[str] = Field(default_factory=list, alias="iconNames")

    @model_validator(mode="after")
    def consistent_counts(self):
        if self.count != len(self.icon_names):
            raise ValueError("count must match the number of icon names")
        if self.has_valid_selection != (self.count > 0):
            raise ValueError("hasValidSelection must be true exactly when count > 0")
        return self

    def to_message(self) -> dict:
        return self.model_dump(by_alias=True)
