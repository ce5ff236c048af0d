"""
Agents Package

This package contains the async agents that connect the record store to the
metrics and planning engine.

Available Agents:
- PlannerAgent:      Daily goal, progress, history and auto-distribution
- AnalyticsAgent:    Dashboard, analytics report and shared user statistics
- SharingAgent:      Per-record visibility, sharing and ownership checks
- ApplicationAgent:  Creating, editing and listing applications
- ProfileAgent:      Profile updates and the share-statistics opt-in
"""

from .base_agent import BaseAgent
from .planner_agent import PlannerAgent
from .analytics_agent import AnalyticsAgent
from .sharing_agent import SharingAgent
from .application_agent import ApplicationAgent
from .profile_agent import ProfileAgent

__all__ = [
    "BaseAgent",
    "PlannerAgent",
    "AnalyticsAgent",
    "SharingAgent",
    "ApplicationAgent",
    "ProfileAgent",
]
