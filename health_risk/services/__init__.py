"""
Core services for the application.

This package contains the dataset loader, the rule-based risk classifier and
the analysis service that ties them together.
"""

from .dataset_loader import (
    CsvRecordSource,
    RecordSource,
    Result,
    SyntheticRecordSource,
    generate_synthetic_dataset,
    load_dataset,
)
from .risk_analysis import RiskAnalysisService
from .risk_classifier import MODEL_VERSION, RULES, classify, describe_model

__all__ = [
    "RecordSource",
    "CsvRecordSource",
    "SyntheticRecordSource",
    "Result",
    "load_dataset",
    "generate_synthetic_dataset",
    "classify",
    "describe_model",
    "RULES",
    "MODEL_VERSION",
    "RiskAnalysisService",
]
