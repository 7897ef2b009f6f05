"""Generators for monthly role assignments and song lineups."""

from .base import BaseGenerator, shuffle
from .lineup import LineupComposer, generate_lineup
from .roles import RoleAssignmentScheduler, can_assign, generate_monthly_schedule, get_sundays_in_month
from .orchestrator import build_lineup, build_month_schedule

__all__ = [
    "BaseGenerator",
    "shuffle",
    "RoleAssignmentScheduler",
    "LineupComposer",
    "can_assign",
    "generate_monthly_schedule",
    "generate_lineup",
    "get_sundays_in_month",
    "build_month_schedule",
    "build_lineup",
]
