"""
Recommendation models.

``Recommendation`` is one optimisation suggestion shown on the
recommendations tab. ``RecommendationBatch`` is the atomic unit a generator
delivers: either the whole batch lands in the session state or nothing does.

Both models are frozen so a delivered batch cannot be edited in place by a
renderer.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from enerx.taxonomy.dashboard_taxonomy import CategoryIcon, Priority


class Recommendation(BaseModel):
    """A single energy-optimisation suggestion.

    Attributes:
        id: Identifier, unique within its batch.
        title: Short headline.
        description: Explanation shown under the headline.
        impact_label: Free-text quantified benefit, e.g. ``"Save ₹450/month"``.
        priority: Urgency band.
        category_icon: Symbolic icon tag for the renderer.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: str
    impact_label: str
    priority: Priority
    category_icon: CategoryIcon

    @field_validator("title", "description", "impact_label")
    @classmethod
    def validate_text_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Recommendation text fields must not be empty.")
        return v.strip()


class RecommendationBatch(BaseModel):
    """Recommendations delivered by one generation request.

    Attributes:
        request_id: Token of the request that produced this batch.
        recommendations: Ordered recommendations; order is display order.
        generated_at: UTC time the generator returned.
    """

    model_config = ConfigDict(frozen=True)

    request_id: int
    recommendations: tuple[Recommendation, ...]
    generated_at: datetime

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "RecommendationBatch":
        ids = [r.id for r in self.recommendations]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Recommendation ids must be unique within a batch, got {ids}.")
        return self
