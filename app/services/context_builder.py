"""
Conversation Context Builder.
Serializes a trip and its parsed plan into the grounding block that is
re-sent with every chat question. The chat model keeps no memory of its
own, so this block is all it knows about the trip.
"""
from ..models.form_schema import FIELD_LABELS, TripRequest
from ..models.sections import DISPLAY_TITLES, TravelPlanSections


def build_trip_header(request: TripRequest) -> str:
    """One line per trip fact, shared with the plan prompt."""
    interests = ", ".join(request.sorted_interests()) or "No specific interests"
    values = {
        "source": request.source,
        "destination": request.destination,
        "dates": f"{request.start_date.isoformat()} to {request.end_date.isoformat()}",
        "budget": request.budget,
        "travelers": request.travelers,
        "interests": interests,
    }
    return "\n".join(f"{label}: {values[field]}" for field, label in FIELD_LABELS.items())


def build_context(request: TripRequest, sections: TravelPlanSections) -> str:
    """
    Build the grounding block for chat.

    Args:
        request: The submitted trip
        sections: The plan parsed from the model's response

    Returns:
        Trip header followed by the six sections, labeled, in contract order
    """
    parts = [
        "TRIP DETAILS:",
        build_trip_header(request),
        "",
        "TRAVEL PLAN:",
    ]
    for section_id, body in sections.items():
        parts.append(f"### {DISPLAY_TITLES[section_id]}")
        parts.append(body)
        parts.append("")

    return "\n".join(parts).rstrip()
