"""Report generation for encounter baselines."""

from __future__ import annotations

from aether_combat.balance.models import EncounterBaseline, EncounterMetrics


def generate_text_report(baseline: EncounterBaseline) -> str:
    """Generate a human-readable summary of the baseline."""
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(
        f"Encounter Baseline Report - {baseline.agent} agent"
        f" as {baseline.player_template}"
    )
    lines.append(f"Runs per enemy: {baseline.num_runs:,} | Generated: {baseline.generated_at}")
    lines.append("=" * 60)

    # Overview sorted hardest first
    by_difficulty = sorted(baseline.encounters, key=lambda m: m.win_rate)
    lines.append("")
    lines.append("## Win Rates (hardest first)")
    for m in by_difficulty:
        lines.append(
            f"  {m.enemy_id:24s}  win={m.win_rate:.1%}  loss={m.loss_rate:.1%}"
            f"  fled={m.flee_rate:.1%}  turns={m.avg_turns:.1f}"
        )

    for m in baseline.encounters:
        lines.extend(_encounter_section(m))

    lines.append("")
    return "\n".join(lines)


def _encounter_section(m: EncounterMetrics) -> list[str]:
    lines = [
        "",
        f"## {m.enemy_id}",
        f"  Outcomes:        {m.wins} win / {m.losses} loss / {m.fled} fled"
        f" / {m.stalled} stalled / {m.timeouts} timeout",
        f"  Avg HP lost:     {m.avg_hp_lost:.1f}",
        f"  Avg dmg dealt:   {m.avg_damage_dealt:.1f}",
        f"  Avg dmg taken:   {m.avg_damage_taken:.1f}",
        f"  Avg enemy heal:  {m.avg_enemy_healed:.1f}",
        f"  Hit/crit/dodge:  {m.hit_rate:.2f} / {m.crit_rate:.2f} / {m.dodge_rate:.2f}",
    ]
    if m.enemy_action_distribution:
        actions = ", ".join(
            f"{action}={share:.0%}" for action, share in m.enemy_action_distribution.items()
        )
        lines.append(f"  Enemy actions:   {actions}")
    if m.skill_usage:
        skills = ", ".join(f"{skill}x{count}" for skill, count in m.skill_usage.items())
        lines.append(f"  Skills used:     {skills}")
    return lines
