"""Attack and healing resolution."""

from __future__ import annotations

from typing import Any

from .components import (
    AttackAction,
    AttackBonus,
    EntityStats,
    Equipped,
    HealAction,
    HealthStats,
    Name,
    SufferDamage,
    World,
)

NO_DAMAGE_MESSAGE = "Took no damage because defense is greater"


def handle_attacks(world: World, messages: Any) -> None:
    """Turn attack actions into queued damage on their targets."""
    for attacker, stats, action, name in list(world.join(EntityStats, AttackAction, Name)):
        target_stats = world.get(action.target, HealthStats)
        if target_stats is None:
            continue
        if target_stats.defense > stats.set.strength:
            messages.log(NO_DAMAGE_MESSAGE)
            continue
        target_name = world.get(action.target, Name)
        if target_name is None:
            raise KeyError(f"attack target {action.target} has no name")
        damage = stats.set.strength - target_stats.defense

        for _, bonus, equipped in world.join(AttackBonus, Equipped):
            if equipped.on != attacker:
                continue
            damage = damage + bonus.value if bonus.value >= 0 else max(damage + bonus.value, 0)

        messages.log(f"{name} dealt {damage} damage to {target_name}")
        SufferDamage.new_damage(world, action.target, -damage)

    world.clear(AttackAction)


def handle_heals(world: World) -> None:
    """Apply queued healing, capped at maximum health."""
    for _, heal, health in world.join(HealAction, HealthStats):
        health.add_health(heal.amount)

    world.clear(HealAction)