"""
Historical vitals dataset loading.

Key patterns:
- Protocol-based record sources (CSV file, synthetic generator)
- Generic Result type for expected failures instead of exceptions
- Graceful degradation: a missing or unreadable dataset becomes an empty list

File format: UTF-8, comma-separated, one header line followed by rows of
respiratory rate, oxygen saturation, heart rate, systolic BP, diastolic BP,
oxygen therapy flag, risk level. Quoting is not supported; a value containing
a comma shifts every field after it.
"""

import math
import random
from pathlib import Path
from typing import Generic, Protocol, TypeVar

import structlog

from health_risk.domain.models import RiskLevel, VitalsRecord

logger = structlog.get_logger(__name__)

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)

FIELD_DELIMITER = ","
EXPECTED_FIELD_COUNT = 7

# Synthetic label bands, as percentages of the requested count
LOW_BAND_END_PERCENT = 60
MEDIUM_BAND_END_PERCENT = 85

# Half-open [low, high) ranges for synthetic vitals
SYNTHETIC_RANGES: dict[str, tuple[float, float]] = {
    "respiratory_rate": (12.0, 27.0),
    "oxygen_saturation": (92.0, 100.0),
    "heart_rate": (60.0, 100.0),
    "systolic_bp": (110.0, 150.0),
    "diastolic_bp": (70.0, 95.0),
}
SYNTHETIC_OXYGEN_THERAPY_RATE = 0.2


class Result(Generic[ValueT, ErrorT]):
    """
    Explicit error handling without exceptions for expected failures.

    Why: Makes error paths visible in type system, forces handling decisions.
    When to use: When failure is expected business logic, not exceptional.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: ValueT) -> ValueT:
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error


class RecordSource(Protocol):
    """
    Protocol for anything that can supply labelled vitals records.

    Why Protocol over ABC: Structural typing, easier mocking, less coupling.
    """

    source_name: str

    def load_records(self) -> Result[list[VitalsRecord], Exception]:
        """
        Load records from the source.

        Returns:
            Result[list[VitalsRecord]]: the records in source order, or the failure.
        """
        ...


def _parse_number(raw: str | None) -> float:
    """Parse a numeric field; anything unparseable or non-finite becomes 0."""
    if raw is None:
        return 0.0
    try:
        value = float(raw.strip())
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _parse_flag(raw: str | None) -> bool:
    if raw is None:
        return False
    value = raw.strip()
    return value.lower() == "true" or value == "1"


def _parse_risk_level(raw: str | None) -> RiskLevel | str:
    """Missing or empty labels default to Low; unknown labels pass through verbatim."""
    if raw is None or not raw.strip():
        return RiskLevel.LOW
    value = raw.strip()
    try:
        return RiskLevel(value)
    except ValueError:
        return value


def parse_row(line: str) -> VitalsRecord:
    """Map one delimited row onto a VitalsRecord, defaulting bad or missing fields."""
    fields: list[str | None] = list(line.rstrip("\r\n").split(FIELD_DELIMITER))
    fields.extend([None] * (EXPECTED_FIELD_COUNT - len(fields)))

    return VitalsRecord(
        respiratory_rate=_parse_number(fields[0]),
        oxygen_saturation=_parse_number(fields[1]),
        heart_rate=_parse_number(fields[2]),
        systolic_bp=_parse_number(fields[3]),
        diastolic_bp=_parse_number(fields[4]),
        oxygen_therapy=_parse_flag(fields[5]),
        risk_level=_parse_risk_level(fields[6]),
    )


class CsvRecordSource:
    """
    Vitals records read from a delimited text file.

    The first line is a header and is always skipped. Blank lines are ignored.
    Malformed rows are kept with their bad fields defaulted; only a failure of
    the whole read (missing file, permissions, decoding) produces an error.
    """

    def __init__(self, path: str | Path, source_name: str | None = None) -> None:
        self.path = Path(path)
        self.source_name = source_name or self.path.name
        self.logger = logger.bind(source=self.source_name, path=str(self.path))

    def load_records(self) -> Result[list[VitalsRecord], Exception]:
        records: list[VitalsRecord] = []
        try:
            with self.path.open(encoding="utf-8") as handle:
                next(handle, None)  # header
                for line_number, line in enumerate(handle, start=2):
                    if not line.strip():
                        continue
                    record = parse_row(line)
                    if not isinstance(record.risk_level, RiskLevel):
                        self.logger.warning(
                            "unrecognized_risk_label",
                            line_number=line_number,
                            label=record.risk_level,
                        )
                    records.append(record)

        except FileNotFoundError as e:
            self.logger.warning("dataset_not_found", error=str(e))
            return Result.err(e)
        except Exception as e:
            self.logger.exception("dataset_load_failed", error=str(e))
            return Result.err(e)

        self.logger.info("dataset_loaded", count=len(records))
        return Result.ok(records)


def load_dataset(source_location: str | Path) -> list[VitalsRecord]:
    """Load labelled vitals from a CSV file. Never raises; failures yield an empty list."""
    return CsvRecordSource(source_location).load_records().unwrap_or([])


def generate_synthetic_dataset(count: int = 100, seed: int | None = None) -> list[VitalsRecord]:
    """
    Generate demo records with a skewed label distribution.

    The first 60% of records are labelled Low, the next 25% Medium and the rest
    High. Vitals are drawn uniformly and independently of the label, so this is
    placeholder data for exercising the classifier, not a model of anything.
    """
    rng = random.Random(seed)
    low_end = count * LOW_BAND_END_PERCENT // 100
    medium_end = count * MEDIUM_BAND_END_PERCENT // 100

    def _draw(field: str) -> float:
        low, high = SYNTHETIC_RANGES[field]
        return low + rng.random() * (high - low)

    records: list[VitalsRecord] = []
    for index in range(max(count, 0)):
        if index < low_end:
            label = RiskLevel.LOW
        elif index < medium_end:
            label = RiskLevel.MEDIUM
        else:
            label = RiskLevel.HIGH

        records.append(
            VitalsRecord(
                respiratory_rate=_draw("respiratory_rate"),
                oxygen_saturation=_draw("oxygen_saturation"),
                heart_rate=_draw("heart_rate"),
                systolic_bp=_draw("systolic_bp"),
                diastolic_bp=_draw("diastolic_bp"),
                oxygen_therapy=rng.random() < SYNTHETIC_OXYGEN_THERAPY_RATE,
                risk_level=label,
            )
        )

    logger.info("synthetic_dataset_generated", count=len(records), seed=seed)
    return records


class SyntheticRecordSource:
    """Record source backed by generate_synthetic_dataset()."""

    def __init__(
        self, count: int = 100, seed: int | None = None, source_name: str = "synthetic"
    ) -> None:
        self.count = count
        self.seed = seed
        self.source_name = source_name

    def load_records(self) -> Result[list[VitalsRecord], Exception]:
        return Result.ok(generate_synthetic_dataset(self.count, self.seed))
