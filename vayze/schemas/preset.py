from pydantic import ConfigDict, Field

from vayze.schemas.base import VayzeModel


class WeightVector(VayzeModel):
    """Relative multipliers for the six questionnaire dimensions."""

    model_config = ConfigDict(frozen=True)

    intuition: float = Field(gt=0)
    risk: float = Field(gt=0)
    consequences: float = Field(gt=0)
    values: float = Field(gt=0)
    external: float = Field(gt=0)
    head_heart: float = Field(gt=0)


class WeightPreset(VayzeModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str
    icon: str
    weights: WeightVector
