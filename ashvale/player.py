"""The player character: movement, dashing, attacking, damage and animation."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from ashvale.geometry import Clock, FloatRect, IntRect, Vec2

logger = logging.getLogger(__name__)

FRAME_WIDTH = 48
FRAME_HEIGHT = 64
SPRITE_SCALE = 2.0
START_POSITION = Vec2(100.0, 100.0)

MAX_HEALTH = 10
ATTACK_DAMAGE = 1
ATTACK_COOLDOWN = 0.5
ATTACK_DURATION = 0.2
DAMAGE_COOLDOWN = 2.15
HEALING_COOLDOWN = 5.0

NORMAL_SPEED = 2.0
DASH_SPEED = 6.5
DASH_COOLDOWN = 1.0
DASH_DURATION = 0.2

DEATH_DURATION = 1.0
DEATH_FRAMES = 6
DEATH_FRAME_DELAY = 0.1

HITBOX_SCALE = 0.4
HITBOX_OFFSET = Vec2(30.0, 35.0)


class PositionGrid(Protocol):
    """Anything that can say whether a pixel position can be walked on."""

    def is_position_passable(self, x: float, y: float) -> bool: ...


class Sheet(Enum):
    """Which sprite sheet the player is currently drawn from."""

    WALK = "walk"
    IDLE = "idle"
    DEATH = "death"


@dataclass(frozen=True)
class InputState:
    """The controls held down during one frame."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    dash: bool = False
    attack: bool = False


# Sheet rows for each direction: (dash, attack, walk).
_ROWS = {
    "right": (11, 8, 5),
    "left": (7, 4, 1),
    "down": (6, 2, 0),
    "up": (9, 10, 3),
}


class Player:
    """State of the player character, advanced one frame at a time."""

    def __init__(self, time_source: Callable[[], float] = time.monotonic) -> None:
        self.position = START_POSITION
        self.health = MAX_HEALTH
        self.score = 0
        self.attack_damage = ATTACK_DAMAGE
        self.damage_cooldown = DAMAGE_COOLDOWN
        self.healing_cooldown = HEALING_COOLDOWN

        self.is_attacking = False
        self.is_dashing = False
        self.is_dead = False
        self.death_animation_complete = False

        self.frame = 0
        self.death_frame = 0
        self.sheet = Sheet.WALK
        self.texture_rect = IntRect(0, 0, FRAME_WIDTH, FRAME_HEIGHT)

        self.attack_cooldown_clock = Clock(time_source)
        self.damage_cooldown_clock = Clock(time_source)
        self.healing_clock = Clock(time_source)
        self.dash_clock = Clock(time_source)
        self.dash_duration_clock = Clock(time_source)
        self.death_clock = Clock(time_source)
        self._animation_clock = Clock(time_source)
        self._death_animation_clock = Clock(time_source)

    @property
    def size(self) -> Vec2:
        """On-screen size of the player sprite."""
        return Vec2(FRAME_WIDTH * SPRITE_SCALE, FRAME_HEIGHT * SPRITE_SCALE)

    def center(self) -> Vec2:
        """Centre of the player sprite in world coordinates."""
        return self.position + self.size / 2

    def hitbox(self) -> FloatRect:
        """The rectangle used for collisions with enemies."""
        return FloatRect(
            self.position.x + HITBOX_OFFSET.x,
            self.position.y + HITBOX_OFFSET.y,
            FRAME_WIDTH * SPRITE_SCALE * HITBOX_SCALE,
            FRAME_HEIGHT * SPRITE_SCALE * HITBOX_SCALE,
        )

    def _row_for(self, direction: str) -> int:
        dash_row, attack_row, walk_row = _ROWS[direction]
        if self.is_dashing:
            return dash_row
        return attack_row if self.is_attacking else walk_row

    def _advance_frame(self, delay: float, total: int) -> None:
        if self._animation_clock.elapsed() > delay:
            self.frame = (self.frame + 1) % total
            self._animation_clock.restart()

    def update(self, inputs: InputState, map_manager: PositionGrid) -> None:
        """Advance the player by one frame given the held controls."""
        if self.is_dead:
            if not self.death_animation_complete:
                self._update_death_animation()
                if self.death_clock.elapsed() > DEATH_DURATION:
                    self.death_animation_complete = True
            return

        if inputs.attack and self.attack_cooldown_clock.elapsed() > ATTACK_COOLDOWN:
            self.is_attacking = True
            self.attack_cooldown_clock.restart()
            self.frame = 0

        move_x = move_y = 0.0
        row = 0
        moving = False
        if inputs.right:
            move_x += 1
            row = self._row_for("right")
            moving = True
        if inputs.left:
            move_x -= 1
            row = self._row_for("left")
            moving = True
        if inputs.down:
            move_y += 1
            row = self._row_for("down")
            moving = True
        if inputs.up:
            move_y -= 1
            row = self._row_for("up")
            moving = True

        if self.is_attacking and self.attack_cooldown_clock.elapsed() > ATTACK_DURATION:
            self.is_attacking = False

        move = Vec2(move_x, move_y)
        if move.x != 0 and move.y != 0:
            move = move / math.sqrt(2.0)

        if inputs.dash and not self.is_dashing and self.dash_clock.elapsed() > DASH_COOLDOWN:
            self.is_dashing = True
            self.dash_duration_clock.restart()
            self.dash_clock.restart()

        speed = NORMAL_SPEED
        if self.is_dashing:
            speed = DASH_SPEED
            if self.dash_duration_clock.elapsed() > DASH_DURATION:
                self.is_dashing = False

        if self.is_attacking:
            self._advance_frame(0.1, 6)
            self.texture_rect = IntRect(
                self.frame * FRAME_WIDTH, row * FRAME_HEIGHT, FRAME_WIDTH, FRAME_HEIGHT
            )
        elif moving:
            self._move(move, speed, map_manager)
            self._advance_frame(0.08 if self.is_dashing else 0.1, 8)
            self.sheet = Sheet.WALK
            self.texture_rect = IntRect(
                self.frame * FRAME_WIDTH, row * FRAME_HEIGHT, FRAME_WIDTH, FRAME_HEIGHT
            )
        else:
            self._advance_frame(0.2, 4)
            self.sheet = Sheet.IDLE
            self.texture_rect = IntRect(self.frame * FRAME_WIDTH, 0, FRAME_WIDTH, FRAME_HEIGHT)

    def _move(self, move: Vec2, speed: float, map_manager: PositionGrid) -> None:
        step = move * speed
        target = self.position + step
        half = self.size / 2
        if move.x != 0 and not map_manager.is_position_passable(
            target.x + half.x, self.position.y + half.y
        ):
            return
        if move.y != 0 and not map_manager.is_position_passable(
            self.position.x + half.x, target.y + half.y
        ):
            return
        self.position = target

    def _update_death_animation(self) -> None:
        self.sheet = Sheet.DEATH
        if self._death_animation_clock.elapsed() > DEATH_FRAME_DELAY:
            if self.death_frame < DEATH_FRAMES - 1:
                self.death_frame += 1
            self._death_animation_clock.restart()
        self.texture_rect = IntRect(
            self.death_frame * FRAME_WIDTH, 0, FRAME_WIDTH, FRAME_HEIGHT
        )

    def take_damage(self, damage: int) -> None:
        """Lose health; at zero the player dies. The dead take no damage."""
        if self.is_dead:
            return
        self.health = max(0, self.health - damage)
        logger.info("Player Health: %d", self.health)
        if self.health <= 0:
            self.is_dead = True
            self.death_clock.restart()
            self.death_frame = 0
            logger.info("Player has died!")
        self.healing_clock.restart()