"""The sword the player carries and its swing animation."""

from __future__ import annotations

import logging
import math
import time
from os import PathLike
from typing import Callable, Iterable, Optional, Tuple, Union

from ashvale.geometry import Clock, Vec2

logger = logging.getLogger(__name__)

SWING_DURATION = 0.25
SWING_AMPLITUDE = 45.0
HAND_OFFSET = 15.0
_PI = 3.14159


class Weapon:
    """A weapon sprite held to the right of the player.

    A weapon whose image could not be loaded has no sprite: it keeps no
    position, but its swing state is still tracked.
    """

    def __init__(
        self,
        image_size: Optional[Tuple[int, int]] = (32, 32),
        scale: float = 1.0,
        swing_duration: float = SWING_DURATION,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        self.scale = scale
        self.swing_duration = swing_duration
        self.image_size = image_size
        self.origin: Optional[Vec2] = (
            Vec2(image_size[0] / 2, image_size[1] / 2) if image_size is not None else None
        )
        self.position: Optional[Vec2] = None
        self.rotation = 0.0
        self.swinging = False
        self._swing_clock = Clock(time_source)

    @classmethod
    def from_file(
        cls,
        path: Union[str, PathLike],
        scale: float = 1.0,
        time_source: Callable[[], float] = time.monotonic,
    ) -> Weapon:
        """Create a weapon sized after an image file; without the file it has no sprite."""
        import pygame

        try:
            image = pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            logger.error("Failed to load weapon texture from: %s (%s)", path, exc)
            return cls(image_size=None, scale=scale, time_source=time_source)
        width, height = image.get_size()
        logger.info("Weapon texture size: %dx%d", width, height)
        return cls(image_size=(width, height), scale=scale, time_source=time_source)

    @property
    def has_sprite(self) -> bool:
        return self.image_size is not None

    def update_position(self, player_pos: Iterable[float], player_size: Iterable[float]) -> None:
        """Put the weapon just right of the player's centre."""
        if not self.has_sprite:
            return
        px, py = player_pos
        width, height = player_size
        self.position = Vec2(px + width / 2 + HAND_OFFSET, py + height / 2)

    def update_swing(self, is_attacking: bool) -> float:
        """Advance the swing animation and return the current rotation in degrees."""
        if is_attacking and not self.swinging:
            self.swinging = True
            self._swing_clock.restart()
        if self.swinging:
            t = self._swing_clock.elapsed() / self.swing_duration
            if t < 1.0:
                self.rotation = math.sin(t * _PI) * SWING_AMPLITUDE
            else:
                self.rotation = 0.0
                self.swinging = False
        else:
            self.rotation = 0.0
        return self.rotation