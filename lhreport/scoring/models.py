"""Data models for scoring."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CategoryScore(BaseModel):
    """Weighted category score with the inputs that produced it."""

    model_config = ConfigDict(frozen=True)

    category_id: str = Field(..., description="Category identifier")
    value: float | None = Field(
        None, description="Weighted mean of scored audits; None when ungraded"
    )
    scored_weight: float = Field(
        0.0, description="Sum of weights that entered the mean", ge=0.0
    )
    total_weight: float = Field(
        0.0, description="Sum of all ref weights in the category", ge=0.0
    )
    contributing: list[str] = Field(
        default_factory=list, description="Audit ids in the mean"
    )
    excluded: list[str] = Field(
        default_factory=list,
        description="Audit ids left out (zero weight or not scored)",
    )

    @property
    def is_graded(self) -> bool:
        """Whether any audit contributed to the score."""
        return self.value is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "category_id": self.category_id,
            "value": self.value,
            "scored_weight": self.scored_weight,
            "total_weight": self.total_weight,
            "contributing": list(self.contributing),
            "excluded": list(self.excluded),
        }
