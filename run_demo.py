"""
End-to-end demonstration of the risk scoring pipeline.

This script exercises:
1. Configuration loading and validation
2. Dataset loading with synthetic fallback
3. Classification of reference vitals scenarios
4. The analysis a risk panel would render

Run with: uv run python run_demo.py
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from health_risk.config import get_config, print_config_summary, validate_config
from health_risk.domain.models import RiskLevel, VitalsSample
from health_risk.observability import configure_logging
from health_risk.services.risk_analysis import RiskAnalysisService
from health_risk.services.risk_classifier import classify, describe_model

console = Console()

LEVEL_STYLES = {RiskLevel.LOW: "green", RiskLevel.MEDIUM: "yellow", RiskLevel.HIGH: "red"}

SCENARIOS: list[tuple[str, VitalsSample]] = [
    (
        "Stable",
        VitalsSample(
            respiratory_rate=18,
            oxygen_saturation=96,
            heart_rate=78,
            systolic_bp=128,
            diastolic_bp=82,
            oxygen_therapy=False,
        ),
    ),
    (
        "Hypoxic on oxygen",
        VitalsSample(
            respiratory_rate=18,
            oxygen_saturation=88,
            heart_rate=78,
            systolic_bp=128,
            diastolic_bp=82,
            oxygen_therapy=True,
        ),
    ),
    (
        "Deteriorating",
        VitalsSample(
            respiratory_rate=8,
            oxygen_saturation=85,
            heart_rate=120,
            systolic_bp=170,
            diastolic_bp=105,
            oxygen_therapy=True,
        ),
    ),
]


def show_configuration() -> bool:
    console.print(Panel("🔧 Configuration", style="blue"))
    try:
        validate_config()
        print_config_summary()
        return True
    except Exception as e:
        console.print(f"❌ Configuration failed: {e}", style="red")
        return False


def show_dataset(service: RiskAnalysisService) -> bool:
    console.print(Panel("📂 Dataset", style="blue"))
    dataset, origin = service.load_dataset()
    if not dataset:
        console.print("❌ No dataset and synthetic fallback disabled", style="red")
        return False

    model = describe_model(dataset)
    console.print(
        f"✅ {len(dataset)} records ({origin}) for {model.model}",
        style="green" if origin == "file" else "yellow",
    )

    counts = {level: 0 for level in RiskLevel}
    other = 0
    for record in dataset:
        if isinstance(record.risk_level, RiskLevel):
            counts[record.risk_level] += 1
        else:
            other += 1

    table = Table(title="Recorded Labels")
    table.add_column("Label", style="cyan")
    table.add_column("Records", style="white")
    for level, count in counts.items():
        table.add_row(level.value, str(count))
    if other:
        table.add_row("(unrecognized)", str(other))
    console.print(table)
    return True


def show_scenarios() -> bool:
    console.print(Panel("🩺 Reference Scenarios", style="blue"))

    table = Table(title="Classifications")
    table.add_column("Scenario", style="cyan")
    table.add_column("Risk", style="white")
    table.add_column("Score", style="magenta")
    table.add_column("Factors", style="yellow")

    for name, vitals in SCENARIOS:
        result = classify(vitals)
        table.add_row(
            name,
            f"[{LEVEL_STYLES[result.risk_level]}]{result.risk_level.value}[/]",
            str(result.risk_score),
            ", ".join(result.factors) or "-",
        )

    console.print(table)
    return True


def show_analysis(service: RiskAnalysisService) -> bool:
    console.print(Panel("📊 Risk Panel", style="blue"))
    analysis = service.analyze()
    prediction = analysis.prediction

    console.print(
        f"Risk Level: {prediction.risk_level.value.upper()} ({prediction.risk_score}/100)",
        style=LEVEL_STYLES[prediction.risk_level],
    )
    for factor in prediction.factors:
        console.print(f"  • {factor}")

    console.print_json(analysis.model_dump_json(by_alias=True))
    return True


def run_demo() -> None:
    console.print(Panel("🧪 Health Risk Engine - Demo", style="bold blue"))

    if not show_configuration():
        return

    config = get_config()
    configure_logging(config.logging)
    service = RiskAnalysisService(config)

    steps = [
        ("Dataset", lambda: show_dataset(service)),
        ("Scenarios", show_scenarios),
        ("Risk Panel", lambda: show_analysis(service)),
    ]

    summary_table = Table()
    summary_table.add_column("Step", style="cyan")
    summary_table.add_column("Result", style="white")

    for step_name, step in steps:
        console.print(f"\n{'=' * 60}")
        try:
            ok = step()
        except Exception as e:
            console.print(f"❌ {step_name} failed with exception: {e}", style="red")
            ok = False
        summary_table.add_row(step_name, "✅ OK" if ok else "❌ FAILED")

    console.print(f"\n{'=' * 60}")
    console.print(summary_table)


if __name__ == "__main__":
    try:
        run_demo()
    except KeyboardInterrupt:
        console.print("\n👋 Demo stopped by user", style="yellow")
