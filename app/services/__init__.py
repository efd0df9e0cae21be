"""Services for travel planner."""
from .llm_client import LLMClient
from .section_parser import SectionParser, DuplicatePolicy
from .planner import TravelPlanner
from .lifecycle import RequestLifecycle
from .notifications import NotificationCenter

__all__ = [
    "LLMClient",
    "SectionParser",
    "DuplicatePolicy",
    "TravelPlanner",
    "RequestLifecycle",
    "NotificationCenter",
]
