"""Overlap engine: slot resolution, grid building and meeting translation."""

from tzoverlap.engine.grid_builder import GridBuilder, build_grid, calculate_overlap_score
from tzoverlap.engine.planner import OverlapPlanner, PlannerConfig
from tzoverlap.engine.resolver import (
    SlotResolver,
    current_time_position,
    first_future_slot,
    resolve_slot,
)
from tzoverlap.engine.session import TimezoneSession
from tzoverlap.engine.translator import MeetingTranslator

__all__ = [
    # Core engine
    "SlotResolver",
    "GridBuilder",
    "MeetingTranslator",
    "resolve_slot",
    "build_grid",
    "calculate_overlap_score",
    # Planner facade
    "OverlapPlanner",
    "PlannerConfig",
    # Session state
    "TimezoneSession",
    # Clock helpers
    "current_time_position",
    "first_future_slot",
]
