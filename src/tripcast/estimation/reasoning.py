"""
Optional natural-language annotation of a trip estimate.

Annotations never change numbers: providers only read the route
intelligence and return text.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .intelligence import RouteIntelligence

logger = logging.getLogger(__name__)


@dataclass
class ReasoningAnnotation:
    summary: str
    recommendations: List[str] = field(default_factory=list)
    optimal_departure_window: str = ""
    alternative_routes: List[str] = field(default_factory=list)
    historical_context: str = ""
    source: str = "rules"


class ReasoningProvider(Protocol):
    def annotate(self, context: RouteIntelligence) -> ReasoningAnnotation:
        ...


class RuleBasedReasoningProvider:
    """
    Builds the annotation offline from the route intelligence.
    """

    def annotate(self, context: RouteIntelligence) -> ReasoningAnnotation:
        in_peak = context.peak_hour_status == "in_peak"
        summary = (
            f"Route from {context.origin_city} to {context.dest_city} analyzed. "
            f"Current traffic multiplier: {context.traffic.multiplier:.2f}x. "
            f"{'Peak hour traffic active.' if in_peak else 'Off-peak conditions.'}"
        )
        alternates = list(dict.fromkeys(r for c in context.constructions for r in c.alternate_routes))[:3]
        return ReasoningAnnotation(
            summary=summary,
            recommendations=list(context.recommendations),
            optimal_departure_window=(
                "After 9:00 PM or before 7:00 AM" if in_peak else "Current time is suitable for travel"
            ),
            alternative_routes=alternates,
            historical_context=context.historical_context,
            source="rules",
        )


def annotate_safely(provider: Optional[ReasoningProvider],
                    context: RouteIntelligence) -> Optional[ReasoningAnnotation]:
    """Runs the provider, logging and dropping any failure."""
    if provider is None:
        return None
    try:
        return provider.annotate(context)
    except Exception as e:
        logger.warning(f"Reasoning annotation failed, continuing without it: {e}")
        return None
