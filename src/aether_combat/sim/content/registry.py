"""Content registry -- loads and serves skill, weapon, enemy and player
templates for the combat simulator.

Content is loaded from JSON files in ``data/content/``.  Skills and
weapons are parsed into IR models up front; enemy and player templates
stay as raw dicts and are turned into combatants on demand by
:meth:`ContentRegistry.build_enemy` / :meth:`ContentRegistry.build_player`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TYPE_CHECKING

from aether_combat.ir.items import WeaponDefinition
from aether_combat.ir.skills import SkillDefinition
from aether_combat.sim.core.entities import Enemy, Player

if TYPE_CHECKING:
    from aether_combat.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

# Default paths relative to the project root.
_PROJECT_ROOT = Path(__file__).resolve().parents[4]  # src/aether_combat/sim/content -> root
_DEFAULT_CONTENT_DIR = _PROJECT_ROOT / "data" / "content"

_SKILLS_FILE = "skills.json"
_WEAPONS_FILE = "weapons.json"
_ENEMIES_FILE = "enemies.json"
_PLAYERS_FILE = "players.json"


def _read_entries(path: Path) -> list[dict[str, Any]]:
    """Read a JSON list, skipping ``_section`` organisational markers."""
    with open(path, encoding="utf-8") as f:
        raw_entries: list[dict[str, Any]] = json.load(f)
    return [raw for raw in raw_entries if "_section" not in raw]


class ContentRegistry:
    """Loads and serves game content.

    The registry is the single source of truth for templates during
    simulation.

    Usage::

        registry = ContentRegistry()
        registry.load_all()

        skill = registry.get_skill("fireball")
        enemy = registry.build_enemy("cave_goblin", rng)
        player = registry.build_player("wanderer")
    """

    def __init__(self) -> None:
        self.skills: dict[str, SkillDefinition] = {}
        self.weapons: dict[str, WeaponDefinition] = {}
        self.enemies: dict[str, dict[str, Any]] = {}
        self.players: dict[str, dict[str, Any]] = {}
        self.content_dir: Path = _DEFAULT_CONTENT_DIR

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(self, content_dir: str | Path | None = None) -> None:
        """Load every content file from *content_dir*.

        Parameters
        ----------
        content_dir:
            Directory holding ``skills.json``, ``weapons.json``,
            ``enemies.json`` and ``players.json``.  Defaults to
            ``data/content`` relative to the project root.
        """
        if content_dir is not None:
            self.content_dir = Path(content_dir)
        self.load_skills(self.content_dir / _SKILLS_FILE)
        self.load_weapons(self.content_dir / _WEAPONS_FILE)
        self.load_enemies(self.content_dir / _ENEMIES_FILE)
        self.load_players(self.content_dir / _PLAYERS_FILE)

    def load_skills(self, path: str | Path | None = None) -> None:
        for raw in _read_entries(Path(path or self.content_dir / _SKILLS_FILE)):
            skill = SkillDefinition.model_validate(raw)
            self.skills[skill.id] = skill

    def load_weapons(self, path: str | Path | None = None) -> None:
        for raw in _read_entries(Path(path or self.content_dir / _WEAPONS_FILE)):
            weapon = WeaponDefinition.model_validate(raw)
            self.weapons[weapon.id] = weapon

    def load_enemies(self, path: str | Path | None = None) -> None:
        for raw in _read_entries(Path(path or self.content_dir / _ENEMIES_FILE)):
            self.enemies[raw["id"]] = raw

    def load_players(self, path: str | Path | None = None) -> None:
        for raw in _read_entries(Path(path or self.content_dir / _PLAYERS_FILE)):
            self.players[raw["id"]] = raw

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_skill(self, skill_id: str) -> SkillDefinition | None:
        """Return the :class:`SkillDefinition` for *skill_id*, or ``None``."""
        return self.skills.get(skill_id)

    def get_weapon(self, weapon_id: str) -> WeaponDefinition | None:
        """Return the :class:`WeaponDefinition` for *weapon_id*, or ``None``."""
        return self.weapons.get(weapon_id)

    def get_enemy_data(self, enemy_id: str) -> dict[str, Any] | None:
        """Return the raw enemy template for *enemy_id*, or ``None``."""
        return self.enemies.get(enemy_id)

    # ------------------------------------------------------------------
    # Combatant construction
    # ------------------------------------------------------------------

    def build_enemy(self, enemy_id: str, rng: GameRNG | None = None) -> Enemy:
        """Instantiate an :class:`Enemy` from its template.

        HP is drawn from ``[hp_min, hp_max]`` with *rng* when given,
        otherwise ``hp_max`` is used.  Mana and stamina start full.

        Raises
        ------
        KeyError
            If *enemy_id* is not a known enemy template.
        """
        data = self.enemies.get(enemy_id)
        if data is None:
            raise KeyError(f"unknown enemy template {enemy_id!r}")

        hp_max = data.get("hp_max", data.get("hp_min", 30))
        hp_min = data.get("hp_min", hp_max)
        hp = rng.random_int(hp_min, hp_max) if rng is not None else hp_max

        raw_skills = data.get("skills", [])
        skills: list[SkillDefinition] | str = (
            raw_skills if isinstance(raw_skills, str)
            else self._resolve_skills(raw_skills, owner=enemy_id)
        )

        return Enemy.model_validate({
            "enemy_id": enemy_id,
            "name": data.get("name", enemy_id),
            "description": data.get("description", ""),
            "max_hp": hp,
            "current_hp": hp,
            "max_mana": data.get("max_mana", 0),
            "current_mana": data.get("max_mana", 0),
            "max_stamina": data.get("max_stamina", 0),
            "current_stamina": data.get("max_stamina", 0),
            "stats": data.get("stats", {}),
            "resistances": data.get("resistances", []),
            "weaknesses": data.get("weaknesses", []),
            "elemental_affinity": data.get("elemental_affinity", "Neutral"),
            "ai_config": data.get("ai", {}),
            "skills": skills,
        })

    def build_player(self, template_id: str) -> Player:
        """Instantiate a :class:`Player` from a player template.

        Raises
        ------
        KeyError
            If *template_id* is not a known player template.
        """
        data = self.players.get(template_id)
        if data is None:
            raise KeyError(f"unknown player template {template_id!r}")

        weapon = None
        weapon_id = data.get("weapon")
        if weapon_id is not None:
            weapon = self.get_weapon(weapon_id)
            if weapon is None:
                logger.warning("Player template %r references unknown weapon %r", template_id, weapon_id)

        return Player(
            name=data.get("name", template_id),
            max_hp=data["max_hp"],
            current_hp=data["max_hp"],
            max_mana=data.get("max_mana", 0),
            current_mana=data.get("max_mana", 0),
            max_stamina=data.get("max_stamina", 0),
            current_stamina=data.get("max_stamina", 0),
            stats=data.get("stats", {}),
            resistances=data.get("resistances", []),
            weaknesses=data.get("weaknesses", []),
            skills=self._resolve_skills(data.get("skills", []), owner=template_id),
            weapon=weapon,
        )

    def _resolve_skills(self, refs: list[Any], owner: str) -> list[SkillDefinition]:
        """Turn skill references (ids or inline dicts) into skill models."""
        skills: list[SkillDefinition] = []
        for ref in refs:
            if isinstance(ref, dict):
                skills.append(SkillDefinition.model_validate(ref))
                continue
            skill = self.get_skill(ref)
            if skill is None:
                logger.warning("%r references unknown skill %r; skipping", owner, ref)
                continue
            skills.append(skill.model_copy())
        return skills
