"""
Application services.
"""
from .planner import TripPlan, TripPlanner
from .builder import TripPlannerBuilder

__all__ = ["TripPlan", "TripPlanner", "TripPlannerBuilder"]
