"""Data models for travel planner."""
from .form_schema import TripRequest, Interest, INTEREST_CATALOG
from .sections import SectionId, TravelPlanSections
from .request_state import RequestState, RequestStatus
from .unread import UnreadSignal
from .session import Session, ChatMessage

__all__ = [
    "TripRequest",
    "Interest",
    "INTEREST_CATALOG",
    "SectionId",
    "TravelPlanSections",
    "RequestState",
    "RequestStatus",
    "UnreadSignal",
    "Session",
    "ChatMessage",
]
