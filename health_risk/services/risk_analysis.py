"""
Risk analysis service combining dataset loading with classification.

This is the seam a consumer (an HTTP handler, a dashboard job) calls:
1. Load the configured dataset, substituting synthetic data when it is empty
2. Pick the vitals to score (caller-supplied, first dataset record, or a default)
3. Classify and attach metadata about the rule set and dataset
"""

import time
from collections.abc import Mapping
from typing import Any

import structlog

from health_risk.config import AppConfig, get_config
from health_risk.domain.models import (
    AnalysisMetadata,
    DatasetOrigin,
    RiskAnalysis,
    VitalsRecord,
    VitalsSample,
)
from health_risk.services.dataset_loader import CsvRecordSource, RecordSource, SyntheticRecordSource
from health_risk.services.risk_classifier import MODEL_VERSION, classify

logger = structlog.get_logger(__name__)

# Scored when neither the caller nor the dataset provides vitals
DEFAULT_SAMPLE = VitalsSample(
    respiratory_rate=18,
    oxygen_saturation=96,
    heart_rate=78,
    systolic_bp=128,
    diastolic_bp=82,
    oxygen_therapy=False,
)


class RiskAnalysisService:
    """
    Produces a renderable risk analysis whether or not a real dataset exists.

    Design principles:
    - Dataset absence is invisible to the end user (synthetic fallback)
    - Stateless between calls: every analysis reloads its dataset
    - Observable (structured logging of origin and timing)
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        primary_source: RecordSource | None = None,
        fallback_source: RecordSource | None = None,
    ) -> None:
        self.config = config or get_config()
        dataset_config = self.config.dataset
        self.primary_source = primary_source or CsvRecordSource(dataset_config.path)
        self.fallback_source: RecordSource | None = fallback_source
        if self.fallback_source is None and dataset_config.synthetic_fallback:
            self.fallback_source = SyntheticRecordSource(
                count=dataset_config.synthetic_count, seed=dataset_config.synthetic_seed
            )
        self.logger = logger.bind(component="risk_analysis_service")

    def load_dataset(self) -> tuple[list[VitalsRecord], DatasetOrigin]:
        """Load the primary dataset, falling back to synthetic records when it is empty."""
        records = self.primary_source.load_records().unwrap_or([])
        if records:
            return records, "file"

        if self.fallback_source is not None:
            result = self.fallback_source.load_records()
            if result.is_ok() and result.unwrap():
                self.logger.info(
                    "using_fallback_dataset",
                    primary=self.primary_source.source_name,
                    fallback=self.fallback_source.source_name,
                )
                return result.unwrap(), "synthetic"
            if result.is_err():
                self.logger.warning(
                    "fallback_dataset_failed",
                    fallback=self.fallback_source.source_name,
                    error=str(result.unwrap_err()),
                )

        return [], "empty"

    def analyze(self, vitals: VitalsSample | Mapping[str, Any] | None = None) -> RiskAnalysis:
        """
        Classify the given vitals, or a representative sample when none are given.

        Without caller vitals the first dataset record is scored; with an empty
        dataset the fixed DEFAULT_SAMPLE is used so a result is always produced.
        """
        start_time = time.perf_counter()
        dataset, origin = self.load_dataset()

        sample: VitalsSample
        if isinstance(vitals, VitalsSample):
            sample = vitals
        elif vitals is not None:
            sample = VitalsSample.model_validate(vitals)
        elif dataset:
            sample = dataset[0]
        else:
            sample = DEFAULT_SAMPLE

        if isinstance(sample, VitalsRecord):
            sample = sample.to_sample()

        prediction = classify(sample)

        self.logger.info(
            "risk_analysis_completed",
            risk_level=prediction.risk_level.value,
            risk_score=prediction.risk_score,
            dataset_origin=origin,
            dataset_size=len(dataset),
            duration_seconds=round(time.perf_counter() - start_time, 3),
        )

        return RiskAnalysis(
            prediction=prediction,
            vitals=sample,
            metadata=AnalysisMetadata(
                model_version=MODEL_VERSION,
                dataset_size=len(dataset),
                dataset_origin=origin,
            ),
        )
