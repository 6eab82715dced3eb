"""
Domain models for vitals-based risk scoring.

These models represent the core business concepts and are framework-agnostic.
Field names are snake_case in Python and serialize with the camelCase aliases
consumers already use (``respiratoryRate``, ``riskScore``, ...).
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HIGH_RISK_THRESHOLD = 60
MEDIUM_RISK_THRESHOLD = 30
MAX_REPORTED_SCORE = 100

DatasetOrigin = Literal["file", "synthetic", "empty"]


class RiskLevel(str, Enum):
    """Ordinal risk tiers, lowest to highest."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_score(cls, score: int) -> "RiskLevel":
        """Map an accumulated (uncapped) score to its tier."""
        if score >= HIGH_RISK_THRESHOLD:
            return cls.HIGH
        if score >= MEDIUM_RISK_THRESHOLD:
            return cls.MEDIUM
        return cls.LOW


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        protected_namespaces=(),
    )


class VitalsSample(_CamelModel):
    """One observation of a patient's vital signs. Values are not range-checked."""

    respiratory_rate: float = Field(description="Breaths per minute")
    oxygen_saturation: float = Field(description="SpO2 percentage")
    heart_rate: float = Field(description="Beats per minute")
    systolic_bp: float = Field(alias="systolicBP", description="Systolic pressure, mmHg")
    diastolic_bp: float = Field(alias="diastolicBP", description="Diastolic pressure, mmHg")
    oxygen_therapy: bool = Field(description="Patient is on supplemental oxygen")


class VitalsRecord(VitalsSample):
    """Historical vitals row carrying its recorded risk label.

    Labels outside the RiskLevel values are kept verbatim as plain strings.
    """

    risk_level: RiskLevel | str = Field(default=RiskLevel.LOW, union_mode="left_to_right")

    def to_sample(self) -> VitalsSample:
        """Drop the label, keeping only the six vitals fields."""
        return VitalsSample.model_validate(self.model_dump(exclude={"risk_level"}))


class ClassificationResult(_CamelModel):
    """Risk classification of a single vitals sample."""

    risk_level: RiskLevel
    risk_score: int = Field(ge=0, le=MAX_REPORTED_SCORE)
    factors: list[str] = Field(default_factory=list)

    # Uncapped total the tier was derived from; not part of the wire format
    raw_score: int = Field(ge=0, exclude=True)


class ModelInfo(_CamelModel):
    """Identifies the rule set and the dataset it was shown alongside."""

    model: str
    training_size: int = Field(ge=0)


class AnalysisMetadata(_CamelModel):
    model_version: str
    dataset_size: int = Field(ge=0)
    dataset_origin: DatasetOrigin
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class RiskAnalysis(_CamelModel):
    """Classification plus the vitals it was computed from, as rendered by a risk panel."""

    prediction: ClassificationResult
    vitals: VitalsSample
    metadata: AnalysisMetadata
