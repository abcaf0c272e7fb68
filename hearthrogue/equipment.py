"""Equipping and unequipping items."""

from __future__ import annotations

from .components import EquipAction, Equipable, EquipmentSlots, Equipped, World


def handle_equip_actions(world: World) -> None:
    """Toggle the equipped state of each requested item, respecting free slots."""
    for equipper, action, slots in list(world.join(EquipAction, EquipmentSlots)):
        target = world.get(action.item, Equipable)
        if target is None:
            continue
        available = sum(1 for slot in slots.slots if slot == target.slot)
        in_use = sum(
            1
            for _, equipped, equipable in world.join(Equipped, Equipable)
            if equipped.on == equipper and equipable.slot == target.slot
        )
        if world.has(action.item, Equipped):
            world.remove(action.item, Equipped)
        elif in_use < available:
            world.insert(action.item, Equipped(equipper))

    world.clear(EquipAction)