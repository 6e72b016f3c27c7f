"""Battle service running deterministic fighter-vs-fighter simulations."""
from __future__ import annotations

import math
from typing import Dict, List, Tuple

from loguru import logger

from brawl.core.rng import RNG
from brawl.core.types import DecidedBy, StepType
from brawl.data.repositories import SkillsRepository
from brawl.domain.battle_models import (
    BattleRules,
    CombatAction,
    Combatant,
    FightResult,
    FightStep,
    HpSnapshot,
    ProgressionNote,
    SpecialEffectNote,
    XpReward,
)
from brawl.domain.entities import Fighter, Stats
from brawl.domain.leveling import project_xp_gain
from brawl.domain.stat_totals import dodge_chance, fighter_max_energy, fighter_max_hp, fighter_total_stats
from brawl.services.progression_service import ProgressionService


class BattleService:
    """Simulates a full fight between two fighter snapshots.

    The inputs are read-only: every simulation works on private
    :class:`Combatant` records, so the same fighter can take part in several
    simulations at once.
    """

    def __init__(
        self,
        skills_repo: SkillsRepository,
        progression_service: ProgressionService,
        rules: BattleRules | None = None,
    ) -> None:
        self._skills_repo = skills_repo
        self._progression = progression_service
        self._rules = rules or BattleRules()

    @property
    def rules(self) -> BattleRules:
        return self._rules

    # -----------------------
    # Setup
    # -----------------------
    def build_combatant(self, fighter: Fighter) -> Combatant:
        class_def = self._progression.class_for_fighter(fighter)
        total_stats = fighter_total_stats(fighter)
        max_hp = fighter_max_hp(class_def, fighter.level, total_stats)
        max_energy = fighter_max_energy(fighter.level)
        return Combatant(
            fighter=fighter,
            total_stats=total_stats,
            max_hp=max_hp,
            hp=max(0, min(fighter.current_hp, max_hp)),
            max_energy=max_energy,
            energy=max_energy,
            actions=self._available_actions(fighter, total_stats),
        )

    def _available_actions(self, fighter: Fighter, total_stats: Stats) -> Tuple[CombatAction, ...]:
        skills = self._skills_repo.all()
        actions: List[CombatAction] = [
            CombatAction(
                id=skill.id,
                name=skill.name,
                damage_multiplier=skill.damage_multiplier,
                energy_cost=skill.energy_cost,
            )
            for skill in skills
            if not skill.is_fallback and total_stats.get(skill.required_stat) > skill.required_value
        ]
        if not actions:
            actions.extend(
                CombatAction(
                    id=skill.id,
                    name=skill.name,
                    damage_multiplier=skill.damage_multiplier,
                    energy_cost=skill.energy_cost,
                )
                for skill in skills
                if skill.is_fallback
            )
        unlocked = set(fighter.unlocked_ability_ids)
        for ability in self._progression.abilities_for_fighter(fighter):
            multiplier = ability.damage_multiplier
            if ability.id not in unlocked or not ability.deals_damage or multiplier is None:
                continue
            actions.append(
                CombatAction(
                    id=ability.id,
                    name=ability.name,
                    damage_multiplier=multiplier,
                    energy_cost=ability.energy_cost,
                    is_ability=True,
                )
            )
        return tuple(actions)

    # -----------------------
    # Simulation
    # -----------------------
    def simulate_fight(self, fighter_a: Fighter, fighter_b: Fighter, rng: RNG) -> FightResult:
        """Run one fight to a knockout or the turn cap and return the full log."""
        if fighter_a.id == fighter_b.id:
            raise ValueError(f"Fighter '{fighter_a.id}' cannot fight itself.")

        first = self.build_combatant(fighter_a)
        second = self.build_combatant(fighter_b)
        logger.info(
            "Fight start: {} ({} HP) vs {} ({} HP)",
            first.id,
            first.hp,
            second.id,
            second.hp,
        )

        attacker, defender = (first, second) if rng.chance(0.5) else (second, first)
        steps: List[FightStep] = []
        turns = 0
        while first.is_alive and second.is_alive and turns < self._rules.turn_cap:
            turns += 1
            steps.append(self._resolve_turn(attacker, defender, rng))
            logger.debug("Turn {}: {}", turns, steps[-1].text)
            if defender.is_alive:
                attacker, defender = defender, attacker

        winner, loser, decided_by = self._decide(first, second, rng)
        steps.append(self._end_step(winner, loser, decided_by))
        rewards = self._reward_steps(winner, loser, steps)
        logger.info(
            "Fight end: {} beat {} after {} turns ({})",
            winner.id,
            loser.id,
            turns,
            decided_by,
        )
        return FightResult(
            winner_id=winner.id,
            loser_id=loser.id,
            turns=turns,
            decided_by=decided_by,
            steps=steps,
            rewards=rewards,
        )

    def _resolve_turn(self, attacker: Combatant, defender: Combatant, rng: RNG) -> FightStep:
        rules = self._rules
        action = self._select_action(attacker, rng)

        weapon_roll = 0
        weapon = attacker.weapon
        if weapon is not None and weapon.damage is not None:
            weapon_roll = rng.randint(weapon.damage.minimum, weapon.damage.maximum)
        damage = attacker.total_stats.strength * rng.uniform(
            rules.damage_variance_min, rules.damage_variance_max
        ) + weapon_roll
        if action is not None:
            damage *= action.damage_multiplier
        defense_multiplier = max(0.0, 1 - defender.total_stats.defense / 100)
        final_damage = max(0, math.floor(damage * defense_multiplier))

        step_type: StepType = "skill" if action is not None else "attack"
        is_critical = False
        if rng.random() * 100 < attacker.total_stats.crit_chance:
            final_damage = math.floor(final_damage * attacker.total_stats.crit_damage)
            step_type = "critical"
            is_critical = True

        if rng.random() < dodge_chance(defender.total_stats):
            final_damage = 0
            step_type = "dodge"
            is_critical = False
        elif rng.random() * 100 < defender.total_stats.block_rate:
            final_damage = math.floor(final_damage * rules.block_multiplier)
            step_type = "block"
        final_damage = max(0, final_damage)

        special_effect = None
        if final_damage > 0:
            final_damage, special_effect = self._apply_item_effects(
                attacker, final_damage, is_critical, rng
            )

        defender.hp = max(0, defender.hp - final_damage)
        return FightStep(
            type=step_type,
            attacker=attacker.id,
            defender=defender.id,
            damage=final_damage,
            skill=action.name if action is not None else None,
            text=self._describe(step_type, attacker, defender, final_damage, action),
            remaining_hp=HpSnapshot(attacker_hp=attacker.hp, defender_hp=defender.hp),
            special_effect=special_effect,
        )

    def _select_action(self, attacker: Combatant, rng: RNG) -> CombatAction | None:
        if not rng.chance(self._rules.skill_chance):
            return None
        affordable = [action for action in attacker.actions if action.energy_cost <= attacker.energy]
        if not affordable:
            return None
        action = rng.choice(affordable)
        attacker.energy -= action.energy_cost
        return action

    def _apply_item_effects(
        self, attacker: Combatant, damage: int, is_critical: bool, rng: RNG
    ) -> Tuple[int, SpecialEffectNote | None]:
        """Roll on-hit (and on-critical) effects; return the step damage and the last effect note."""
        note: SpecialEffectNote | None = None
        bonus_total = 0
        for _, item in attacker.fighter.equipment.items():
            for effect in item.special_effects:
                triggered = effect.trigger == "on_hit" or (is_critical and effect.trigger == "on_critical")
                if not triggered or effect.kind == "none":
                    continue
                if not rng.chance(effect.trigger_chance):
                    continue
                amount = math.floor(damage * effect.strength)
                if effect.kind == "life_steal":
                    attacker.hp = min(attacker.max_hp, attacker.hp + amount)
                    note = SpecialEffectNote(
                        name=effect.name,
                        description=f"{attacker.name} healed for {amount} HP!",
                    )
                else:
                    bonus_total += amount
                    note = SpecialEffectNote(
                        name=effect.name,
                        description=f"{attacker.name}'s {effect.name} dealt {amount} additional damage!",
                    )
        return damage + bonus_total, note

    @staticmethod
    def _describe(
        step_type: StepType,
        attacker: Combatant,
        defender: Combatant,
        damage: int,
        action: CombatAction | None,
    ) -> str:
        if step_type == "dodge":
            return f"{defender.name} dodged {attacker.name}'s attack!"
        if step_type == "block":
            return f"{defender.name} blocked and reduced {attacker.name}'s attack to {damage} damage!"
        if step_type == "critical":
            return f"{attacker.name} landed a CRITICAL hit on {defender.name} for {damage} damage!"
        if step_type == "skill" and action is not None:
            return f"{attacker.name} used {action.name} for {damage} damage!"
        return f"{attacker.name} attacked {defender.name} for {damage} damage!"

    # -----------------------
    # Outcome
    # -----------------------
    @staticmethod
    def _decide(first: Combatant, second: Combatant, rng: RNG) -> Tuple[Combatant, Combatant, DecidedBy]:
        if not second.is_alive:
            return first, second, "knockout"
        if not first.is_alive:
            return second, first, "knockout"
        if first.hp != second.hp:
            winner, loser = (first, second) if first.hp > second.hp else (second, first)
            return winner, loser, "hp_lead"
        winner, loser = (first, second) if rng.chance(0.5) else (second, first)
        return winner, loser, "coin_flip"

    @staticmethod
    def _end_step(winner: Combatant, loser: Combatant, decided_by: DecidedBy) -> FightStep:
        if decided_by == "knockout":
            text = f"{winner.name} defeated {loser.name}!"
        elif decided_by == "hp_lead":
            text = f"Time is up! {winner.name} wins with {winner.hp} HP left against {loser.hp}."
        else:
            text = f"Time is up with both fighters at {winner.hp} HP. {winner.name} wins the coin toss!"
        return FightStep(
            type="end",
            attacker=winner.id,
            defender=loser.id,
            text=text,
            remaining_hp=HpSnapshot(attacker_hp=winner.hp, defender_hp=loser.hp),
            winner=winner.id,
            loser=loser.id,
            decided_by=decided_by,
        )

    def _reward_steps(
        self, winner: Combatant, loser: Combatant, steps: List[FightStep]
    ) -> Dict[str, XpReward]:
        """Append XP summary steps and return the would-be rewards; nothing is mutated."""
        rules = self._rules
        winner_reward = self._preview_reward(
            winner, rules.winner_xp_base + loser.fighter.level * rules.winner_xp_per_level
        )
        loser_reward = self._preview_reward(
            loser, rules.loser_xp_base + winner.fighter.level * rules.loser_xp_per_level
        )

        steps.append(
            FightStep(
                type="special",
                attacker=winner.id,
                defender=loser.id,
                text=f"{winner.name} gained {winner_reward.xp_gained} XP!",
                progression=ProgressionNote(
                    xp_gained=winner_reward.xp_gained,
                    leveled_up=winner_reward.leveled_up,
                    new_level=winner_reward.new_level,
                ),
            )
        )
        steps.append(
            FightStep(
                type="special",
                attacker=loser.id,
                defender=winner.id,
                text=f"{loser.name} gained {loser_reward.xp_gained} XP for participating.",
                progression=ProgressionNote(
                    xp_gained=loser_reward.xp_gained,
                    leveled_up=loser_reward.leveled_up,
                    new_level=loser_reward.new_level,
                ),
            )
        )
        for combatant, opponent, reward in ((winner, loser, winner_reward), (loser, winner, loser_reward)):
            if reward.leveled_up:
                steps.append(
                    FightStep(
                        type="levelup",
                        attacker=combatant.id,
                        defender=opponent.id,
                        text=f"{combatant.name} reached level {reward.new_level}!",
                        progression=ProgressionNote(
                            leveled_up=True,
                            new_level=reward.new_level,
                            unlocked_ability_ids=reward.unlocked_ability_ids,
                        ),
                    )
                )
        return {winner.id: winner_reward, loser.id: loser_reward}

    def _preview_reward(self, combatant: Combatant, xp: int) -> XpReward:
        fighter = combatant.fighter
        projection = project_xp_gain(fighter.level, fighter.experience, xp)
        unlocked: Tuple[str, ...] = ()
        if projection.leveled_up:
            character_class = self._progression.class_for_fighter(fighter).id
            unlocked = tuple(
                self._progression.preview_unlocks(character_class, fighter.level, projection.level)
            )
        return XpReward(
            fighter_id=fighter.id,
            xp_gained=xp,
            leveled_up=projection.leveled_up,
            new_level=projection.level,
            unlocked_ability_ids=unlocked,
        )
