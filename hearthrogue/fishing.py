"""Fishing: waiting for a bite, the reeling minigame and bubbling fishing spots."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .components import (
    Entity,
    FinishedActivity,
    FishAction,
    FishOnTheLine,
    Fishable,
    GameAction,
    Name,
    Renderable,
    WaitingForFish,
    Water,
    Without,
    World,
)
from .items import ItemID, ItemSpawner, SpawnType

log = logging.getLogger(__name__)

WHITE = (255, 255, 255)
EFFECT_Z = 10

FISH_DELAY_TIME = 1.0
BITE_THRESHOLD = 80
BUBBLE_SPAWN_RATE = 1000
BUBBLE_LIFETIME_SECS = 10.0
BUBBLE_GLYPH = 47
CAUGHT_FISH_ID = ItemID(3)

SUCCESS_MESSAGE = "#[bright_green]Success!#[]"
GOT_AWAY_MESSAGE = "#[red]Ahhh, the fish got away.#[]"
MISSED_MESSAGE = "#[orange]Missed#[] the fish zone."


class Direction(enum.Enum):
    LEFT = -1.0
    RIGHT = 1.0


@dataclass
class Cursor:
    """The moving marker on the minigame bar; speed is in blocks per second."""

    speed: float
    direction: Direction
    position: float = 0.0

    def bar_position(self) -> int:
        """The bar cell the cursor is on."""
        return max(0, int(self.position))


@dataclass
class GoalBar:
    """The target zone starts at index `goal` and spans `goal_width` cells."""

    goal: int
    goal_width: int
    bar_width: int


@dataclass
class ReelBar:
    """How close the fish is to escaping; 100 percent means it got away."""

    catch_percent: float
    runaway_speed: float


class FishingBehavior(enum.Enum):
    BACK_N_FORTH = enum.auto()
    LOOP_AROUND = enum.auto()


@dataclass
class FishingMinigame:
    cursor: Cursor
    goal_bar: GoalBar
    attempts_left: int
    reel: ReelBar
    mode: FishingBehavior


def _new_minigame() -> FishingMinigame:
    return FishingMinigame(
        cursor=Cursor(15.0, Direction.RIGHT),
        goal_bar=GoalBar(goal=5, goal_width=9, bar_width=18),
        attempts_left=3,
        reel=ReelBar(catch_percent=60.0, runaway_speed=1.0),
        mode=FishingBehavior.BACK_N_FORTH,
    )


def setup_fishing_actions(world: World, rng: Any) -> None:
    """Start every requested fishing action by waiting for a bite."""
    for fisher, _action in list(world.join(FishAction)):
        attempts = rng.randrange(2, 6)
        previous = world.insert(fisher, WaitingForFish(attempts))
        if previous is not None:
            log.error(
                "entity %s was already waiting for fish, they should not have performed the action again",
                fisher,
            )
    world.clear(FishAction)


def wait_for_fish(world: World, player: Optional[Entity], dt: float, messages: Any, rng: Any) -> None:
    """Roll for bites once per delay; a bite starts the minigame for the player."""
    finished: list[Entity] = []

    for entity, waiter, name in list(world.join(WaitingForFish, Name)):
        if waiter.attempts == 0:
            finished.append(entity)
            messages.enhance(f"{name} ran out of attempts to catch a fish")
            continue

        waiter.time_since_last_attempt += dt
        if waiter.time_since_last_attempt <= FISH_DELAY_TIME:
            continue
        waiter.time_since_last_attempt = 0.0
        waiter.attempts -= 1

        roll = rng.randrange(1, 100)
        messages.debug(f"Attempts left: {waiter.attempts} | Rolled: {roll} ")
        if roll < BITE_THRESHOLD:
            continue

        finished.append(entity)
        if entity == player:
            world.insert(entity, _new_minigame())
        else:
            log.info("%s caught a fish", name)
            messages.log(f"{name} caught a fish wow with {waiter.attempts} attempts remaining")

        previous = world.insert(entity, FishOnTheLine())
        if previous is not None:
            messages.debug(
                f"ERROR: entity {name} {entity} already had a fish on their line, cannot add a second fish"
            )

    for entity in finished:
        world.remove(entity, WaitingForFish)
        if entity == player and world.has(entity, FishingMinigame):
            log.info("Player entering minigame state")
            continue
        world.insert(entity, FinishedActivity())


def update_minigames(world: World, dt: float, messages: Any) -> None:
    """Move each minigame cursor and let the fish pull away over time."""
    for fisher, game in list(world.join(FishingMinigame)):
        cursor = game.cursor
        cursor.position += cursor.speed * dt * cursor.direction.value

        end = game.goal_bar.bar_width - 1.0
        if game.mode is FishingBehavior.BACK_N_FORTH:
            if cursor.position >= end:
                cursor.direction = Direction.LEFT
            elif cursor.position <= 1.0:
                cursor.direction = Direction.RIGHT
        elif cursor.position >= end:
            cursor.position = 0.0

        if game.reel.catch_percent <= 0.0:
            world.insert(fisher, FinishedActivity())
            messages.log(SUCCESS_MESSAGE)
            continue

        game.reel.catch_percent += game.reel.runaway_speed * dt

        if game.reel.catch_percent >= 100.0 or game.attempts_left == 0:
            messages.log(GOT_AWAY_MESSAGE)
            world.remove(fisher, FishOnTheLine)
            world.remove(fisher, FishingMinigame)
            world.insert(fisher, FinishedActivity())


def check_minigame(world: World, player: Optional[Entity], messages: Any) -> None:
    """Resolve the player's action press against the goal zone."""
    found = next(
        (
            game
            for entity, _action, _hook, game in world.join(
                GameAction, FishOnTheLine, FishingMinigame, Without(FinishedActivity)
            )
            if entity == player
        ),
        None,
    )
    if found is not None:
        hit = found.cursor.bar_position()
        start = found.goal_bar.goal
        if start <= hit <= start + found.goal_bar.goal_width:
            messages.log(SUCCESS_MESSAGE)
            found.reel.catch_percent -= 15.0
        else:
            messages.log(MISSED_MESSAGE)
            found.attempts_left = max(found.attempts_left - 1, 0)
            found.reel.catch_percent += 5.0

    world.clear(GameAction)


def catch_fish(world: World, spawner: ItemSpawner, messages: Any) -> None:
    """Give a fish to everyone who finished their activity with a fish on the line."""
    caught = [
        (entity, name)
        for entity, _hook, name, _done in world.join(FishOnTheLine, Name, FinishedActivity)
    ]
    for entity, name in caught:
        messages.enhance(f"{name} caught a really big fish!")
        spawner.request(CAUGHT_FISH_ID, SpawnType.in_bag(entity))
    for entity, _ in caught:
        world.remove(entity, FishOnTheLine)
        world.remove(entity, FishingMinigame)


def create_bubbles(world: World, rng: Any) -> None:
    """Occasionally turn a water tile into a fishing spot."""
    new_bubbles = [
        entity
        for entity, _water in world.join(Water, Without(Fishable))
        if rng.randrange(0, BUBBLE_SPAWN_RATE) < 3
    ]
    for entity in new_bubbles:
        world.insert(entity, Fishable(BUBBLE_LIFETIME_SECS))
        world.insert(entity, Renderable.clear_bg(BUBBLE_GLYPH, WHITE, EFFECT_Z))


def poll_fishing_tiles(world: World, dt: float) -> None:
    """Age fishing spots and remove those that have run out of time."""
    expired = []
    for entity, fishable in world.join(Fishable):
        fishable.time_left = max(fishable.time_left - dt, 0.0)
        if fishable.time_left == 0.0:
            expired.append(entity)
    for entity in expired:
        world.remove(entity, Renderable)
        world.remove(entity, Fishable)