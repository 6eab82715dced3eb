"""
Rule-based health-risk classification.

Each vital group is scored by an independent VitalRule: the rule resolves the
sample to exactly one tier, and the tier maps to a (points, factor) pair or to
nothing. Classification folds the ordered rule list into a score and a factor
list, then maps the uncapped score to a RiskLevel. The result is labelled
"decision-tree-v1" for display, but it is a fixed threshold table, not a
trained model.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from health_risk.domain.models import (
    MAX_REPORTED_SCORE,
    ClassificationResult,
    ModelInfo,
    RiskLevel,
    VitalsRecord,
    VitalsSample,
)

logger = structlog.get_logger(__name__)

MODEL_VERSION = "decision-tree-v1"


class Tier(str, Enum):
    """Severity of a single vital's deviation from normal."""

    NONE = "none"
    BORDERLINE = "borderline"
    SEVERE = "severe"


class BloodPressureTier(str, Enum):
    """Blood pressure resolves to one of three exclusive abnormal branches."""

    NORMAL = "normal"
    HIGH = "high"
    ELEVATED = "elevated"
    LOW = "low"


@dataclass(frozen=True)
class RuleContribution:
    points: int
    factor: str


@dataclass(frozen=True)
class VitalRule:
    """One vital group: how to resolve a tier, and what each tier is worth."""

    name: str
    assess: Callable[[VitalsSample], Enum]
    contributions: Mapping[Enum, RuleContribution]

    def evaluate(self, sample: VitalsSample) -> RuleContribution | None:
        return self.contributions.get(self.assess(sample))


def _respiratory_tier(sample: VitalsSample) -> Tier:
    # Normal: 12-20 breaths/min
    rate = sample.respiratory_rate
    if rate < 10 or rate > 24:
        return Tier.SEVERE
    if rate < 12 or rate > 20:
        return Tier.BORDERLINE
    return Tier.NONE


def _oxygen_saturation_tier(sample: VitalsSample) -> Tier:
    # Normal: 95-100%
    if sample.oxygen_saturation < 90:
        return Tier.SEVERE
    if sample.oxygen_saturation < 95:
        return Tier.BORDERLINE
    return Tier.NONE


def _heart_rate_tier(sample: VitalsSample) -> Tier:
    # Normal: 60-100 bpm
    rate = sample.heart_rate
    if rate < 50 or rate > 110:
        return Tier.SEVERE
    if rate < 60 or rate > 100:
        return Tier.BORDERLINE
    return Tier.NONE


def _blood_pressure_tier(sample: VitalsSample) -> BloodPressureTier:
    systolic, diastolic = sample.systolic_bp, sample.diastolic_bp
    if systolic > 160 or diastolic > 100:
        return BloodPressureTier.HIGH
    if systolic > 140 or diastolic > 90:
        return BloodPressureTier.ELEVATED
    if systolic < 90 or diastolic < 60:
        return BloodPressureTier.LOW
    return BloodPressureTier.NORMAL


def _oxygen_therapy_tier(sample: VitalsSample) -> Tier:
    return Tier.SEVERE if sample.oxygen_therapy else Tier.NONE


RESPIRATORY_RATE_RULE = VitalRule(
    name="respiratory_rate",
    assess=_respiratory_tier,
    contributions={
        Tier.SEVERE: RuleContribution(25, "Abnormal respiratory rate"),
        Tier.BORDERLINE: RuleContribution(10, "Borderline respiratory rate"),
    },
)

OXYGEN_SATURATION_RULE = VitalRule(
    name="oxygen_saturation",
    assess=_oxygen_saturation_tier,
    contributions={
        Tier.SEVERE: RuleContribution(35, "Low oxygen saturation"),
        Tier.BORDERLINE: RuleContribution(15, "Borderline oxygen saturation"),
    },
)

HEART_RATE_RULE = VitalRule(
    name="heart_rate",
    assess=_heart_rate_tier,
    contributions={
        Tier.SEVERE: RuleContribution(25, "Abnormal heart rate"),
        Tier.BORDERLINE: RuleContribution(10, "Borderline heart rate"),
    },
)

BLOOD_PRESSURE_RULE = VitalRule(
    name="blood_pressure",
    assess=_blood_pressure_tier,
    contributions={
        BloodPressureTier.HIGH: RuleContribution(30, "High blood pressure"),
        BloodPressureTier.ELEVATED: RuleContribution(15, "Elevated blood pressure"),
        BloodPressureTier.LOW: RuleContribution(20, "Low blood pressure"),
    },
)

OXYGEN_THERAPY_RULE = VitalRule(
    name="oxygen_therapy",
    assess=_oxygen_therapy_tier,
    contributions={Tier.SEVERE: RuleContribution(20, "Requires oxygen therapy")},
)

# Evaluation order is also factor order
RULES: tuple[VitalRule, ...] = (
    RESPIRATORY_RATE_RULE,
    OXYGEN_SATURATION_RULE,
    HEART_RATE_RULE,
    BLOOD_PRESSURE_RULE,
    OXYGEN_THERAPY_RULE,
)


def _as_sample(vitals: VitalsSample | Mapping[str, Any]) -> VitalsSample:
    if isinstance(vitals, VitalsRecord):
        return vitals.to_sample()
    if isinstance(vitals, VitalsSample):
        return vitals
    return VitalsSample.model_validate(vitals)


def classify(vitals: VitalsSample | Mapping[str, Any]) -> ClassificationResult:
    """
    Classify one vitals sample.

    Accepts a VitalsSample, a VitalsRecord (its label is ignored) or a mapping
    with the six vitals fields under snake_case or camelCase keys. Every
    numeric input produces a result; nothing is range-checked.
    """
    sample = _as_sample(vitals)

    fired = [c for rule in RULES if (c := rule.evaluate(sample)) is not None]
    score = sum(c.points for c in fired)
    risk_level = RiskLevel.from_score(score)

    logger.debug(
        "risk_classified", risk_level=risk_level.value, score=score, rules_fired=len(fired)
    )

    return ClassificationResult(
        risk_level=risk_level,
        risk_score=min(score, MAX_REPORTED_SCORE),
        factors=[c.factor for c in fired],
        raw_score=score,
    )


def describe_model(dataset: list[VitalsRecord]) -> ModelInfo:
    """Identify the rule set. Nothing is trained; the dataset is only counted."""
    return ModelInfo(model=MODEL_VERSION, training_size=len(dataset))
