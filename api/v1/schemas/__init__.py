"""Re-export individual schema modules for easy imports."""

from .profile import MetricsOut, MetricsResponse, ProfileIn, ProfileOut, StoredProfileOut
from .plan import ChatRequest, ChatResponse, PlansResponse
from .units import ImperialOut, MetricOut

__all__ = [
    "ProfileIn",
    "ProfileOut",
    "StoredProfileOut",
    "MetricsOut",
    "MetricsResponse",
    "PlansResponse",
    "ChatRequest",
    "ChatResponse",
    "ImperialOut",
    "MetricOut",
]
