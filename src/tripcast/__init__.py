"""
Traffic-aware trip duration estimates and departure-time recommendations.
"""
__version__ = "0.1.0"
