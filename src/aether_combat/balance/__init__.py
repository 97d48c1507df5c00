"""Balance analysis: encounter baselines, metrics, and reports."""

from aether_combat.balance.baselines import generate_baseline, load_baseline, save_baseline
from aether_combat.balance.metrics import compute_all_metrics, compute_encounter_metrics
from aether_combat.balance.models import EncounterBaseline, EncounterMetrics
from aether_combat.balance.report import generate_text_report

__all__ = [
    "EncounterBaseline",
    "EncounterMetrics",
    "compute_all_metrics",
    "compute_encounter_metrics",
    "generate_baseline",
    "generate_text_report",
    "load_baseline",
    "save_baseline",
]
