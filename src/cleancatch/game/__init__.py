"""Drop lifecycle and scoring loop."""

from cleancatch.game.drops import BAD_KINDS, Drop, DropKind, DropState, Rect, fall_position, fall_progress
from cleancatch.game.placement import Placement, PositionSampler, RecentPositions
from cleancatch.game.factory import DropFactory
from cleancatch.game.catcher import CatcherController
from cleancatch.game.collision import FallEngine, Resolution, catches
from cleancatch.game.timers import IntervalTimer
from cleancatch.game.round import RoundController, RoundStats, RoundSummary

__all__ = [
    "BAD_KINDS",
    "Drop",
    "DropKind",
    "DropState",
    "Rect",
    "fall_position",
    "fall_progress",
    "Placement",
    "PositionSampler",
    "RecentPositions",
    "DropFactory",
    "CatcherController",
    "FallEngine",
    "Resolution",
    "catches",
    "IntervalTimer",
    "RoundController",
    "RoundStats",
    "RoundSummary",
]
