import pytest

from hearthrogue.combat import NO_DAMAGE_MESSAGE, handle_attacks, handle_heals
from hearthrogue.components import (
    AttackAction,
    AttackBonus,
    EntityStats,
    Equipped,
    HealAction,
    HealthStats,
    Name,
    Stats,
    SufferDamage,
    World,
)


class Messages:
    def __init__(self):
        self.lines = []

    def log(self, text):
        self.lines.append(text)


def fight(strength, defense):
    world = World()
    attacker = world.create_entity(EntityStats(Stats(strength=strength)), Name("Greg"))
    target = world.create_entity(HealthStats.full(10, defense), Name("Bob"))
    world.insert(attacker, AttackAction(target))
    return world, attacker, target


def test_attack_queues_damage():
    world, attacker, target = fight(5, 2)
    messages = Messages()
    handle_attacks(world, messages)
    assert world.get(target, SufferDamage).amount == [-3]
    assert messages.lines == ["Greg dealt 3 damage to Bob"]
    assert not world.has(attacker, AttackAction)


def test_defense_blocks():
    world, attacker, target = fight(1, 4)
    messages = Messages()
    handle_attacks(world, messages)
    assert messages.lines == [NO_DAMAGE_MESSAGE]
    assert not world.has(target, SufferDamage)


def test_equipped_bonus_adds():
    world, attacker, target = fight(4, 4)
    world.create_entity(AttackBonus(2), Equipped(attacker))
    handle_attacks(world, Messages())
    assert world.get(target, SufferDamage).amount == [-2]


def test_negative_bonus_saturates():
    world, attacker, target = fight(3, 1)
    world.create_entity(AttackBonus(-5), Equipped(attacker))
    handle_attacks(world, Messages())
    assert world.get(target, SufferDamage).amount == [0]


def test_bonus_on_someone_else_ignored():
    world, attacker, target = fight(4, 4)
    world.create_entity(AttackBonus(7), Equipped(target))
    handle_attacks(world, Messages())
    assert world.get(target, SufferDamage).amount == [0]


def test_unnamed_target_raises():
    world = World()
    attacker = world.create_entity(EntityStats(Stats(strength=5)), Name("Greg"))
    target = world.create_entity(HealthStats.full(10, 0))
    world.insert(attacker, AttackAction(target))
    with pytest.raises(KeyError):
        handle_attacks(world, Messages())


def test_heal_capped_and_cleared():
    world = World()
    patient = world.create_entity(HealthStats(3, 10, 0), HealAction(20))
    handle_heals(world)
    health = world.get(patient, HealthStats)
    assert health.hp == health.max_hp
    assert not world.has(patient, HealAction)


def test_heal_partial():
    world = World()
    patient = world.create_entity(HealthStats(3, 10, 0), HealAction(2))
    handle_heals(world)
    assert world.get(patient, HealthStats).hp == 5