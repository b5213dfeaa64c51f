"""Drop factory: randomized kind, size and rotation for new drops."""

import logging
import random
from typing import Optional

from cleancatch.config.settings import DifficultyPreset, GameSettings
from cleancatch.game.drops import BAD_KINDS, Drop, DropKind
from cleancatch.game.placement import PositionSampler, RecentPositions

logger = logging.getLogger(__name__)

# (narrow, wide) diameters in pixels
BANANA_SIZES = (78, 90)
DROP_SIZES = (52, 60)


class DropFactory:
    """Builds drops for the current difficulty and viewport."""

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        sampler: Optional[PositionSampler] = None,
    ):
        self.settings = settings or GameSettings()
        self._rng = rng or random.Random()
        if sampler is None:
            sampler = PositionSampler(
                RecentPositions(self.settings.recent_drop_ttl_ms),
                min_distance=self.settings.min_drop_distance,
                max_attempts=self.settings.max_placement_attempts,
                rng=self._rng,
            )
        self.sampler = sampler

    @property
    def ledger(self) -> RecentPositions:
        return self.sampler.ledger

    def choose_kind(self) -> DropKind:
        if self._rng.random() < self.settings.good_drop_chance:
            return DropKind.CLEAN
        return BAD_KINDS[self._rng.randrange(len(BAD_KINDS))]

    def size_for(self, kind: DropKind, viewport_width: float) -> int:
        narrow = viewport_width <= self.settings.narrow_viewport_max
        sizes = BANANA_SIZES if kind is DropKind.BANANA else DROP_SIZES
        return sizes[0] if narrow else sizes[1]

    def rotation_for(self, kind: DropKind) -> int:
        if kind.rotates:
            return self._rng.randrange(360)
        return 0

    def create(
        self,
        preset: DifficultyPreset,
        viewport_width: float,
        container_width: float,
        now_ms: float = 0.0,
    ) -> Drop:
        kind = self.choose_kind()
        size = self.size_for(kind, viewport_width)
        placement = self.sampler.sample(container_width, size, now_ms)
        drop = Drop(
            kind=kind,
            spawn_x=placement.x,
            size=size,
            rotation=self.rotation_for(kind),
            fall_duration_ms=preset.fall_duration_ms,
            spawned_at_ms=now_ms,
        )
        logger.debug(
            f"Drop {drop.drop_id}: {kind.name} x={drop.spawn_x:.1f} size={size} rot={drop.rotation}"
        )
        return drop
