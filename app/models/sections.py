"""
Travel plan sections - The fixed six-section contract shared by the
prompt builder, the parser and the chat grounding.
"""
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


class SectionId(str, Enum):
    """The six sections of a travel plan, in contract order."""
    TRAVEL_OPTIONS = "travel_options"
    ACCOMMODATION = "accommodation"
    ITINERARY = "itinerary"
    DINING = "dining"
    TRANSPORTATION = "transportation"
    COST_BREAKDOWN = "cost_breakdown"


# Titles the prompt asks the model to use, numbered 1..6 in this order
PROMPT_TITLES = {
    SectionId.TRAVEL_OPTIONS: "Best Travel Options (flights/trains)",
    SectionId.ACCOMMODATION: "Accommodation Suggestions",
    SectionId.ITINERARY: "Daily Itinerary",
    SectionId.DINING: "Food & Dining Options",
    SectionId.TRANSPORTATION: "Local Transportation Tips",
    SectionId.COST_BREAKDOWN: "Estimated Cost Breakdown",
}

DISPLAY_TITLES = {
    SectionId.TRAVEL_OPTIONS: "Best Travel Options",
    SectionId.ACCOMMODATION: "Accommodation Suggestions",
    SectionId.ITINERARY: "Daily Itinerary",
    SectionId.DINING: "Food & Dining Options",
    SectionId.TRANSPORTATION: "Local Transportation Tips",
    SectionId.COST_BREAKDOWN: "Estimated Cost Breakdown",
}

PLACEHOLDER_NAMES = {
    SectionId.TRAVEL_OPTIONS: "travel options",
    SectionId.ACCOMMODATION: "accommodation suggestions",
    SectionId.ITINERARY: "itinerary",
    SectionId.DINING: "dining options",
    SectionId.TRANSPORTATION: "transportation tips",
    SectionId.COST_BREAKDOWN: "cost breakdown",
}


def placeholder_for(section_id: SectionId) -> str:
    """Body used when a section could not be recovered from the response."""
    return f"No {PLACEHOLDER_NAMES[section_id]} available."


class TravelPlanSections(BaseModel):
    """
    A parsed travel plan. Every section is always present: a section the
    model did not produce holds its placeholder text.
    """
    model_config = ConfigDict(frozen=True)

    travel_options: str = Field(..., description="Flights/trains and how to get there")
    accommodation: str = Field(..., description="Where to stay")
    itinerary: str = Field(..., description="Day-by-day plan")
    dining: str = Field(..., description="Food and dining options")
    transportation: str = Field(..., description="Getting around locally")
    cost_breakdown: str = Field(..., description="Estimated costs")

    @classmethod
    def from_mapping(cls, bodies: dict) -> "TravelPlanSections":
        """Build from a partial {SectionId: body} mapping, filling placeholders."""
        return cls(**{
            section_id.value: bodies.get(section_id) or placeholder_for(section_id)
            for section_id in SectionId
        })

    @classmethod
    def empty(cls) -> "TravelPlanSections":
        return cls.from_mapping({})

    def get(self, section_id: SectionId) -> str:
        return getattr(self, SectionId(section_id).value)

    def items(self) -> list[tuple[SectionId, str]]:
        """Sections in contract order."""
        return [(section_id, self.get(section_id)) for section_id in SectionId]

    def placeholders(self) -> list[SectionId]:
        """Sections that hold placeholder text."""
        return [
            section_id for section_id, body in self.items()
            if body == placeholder_for(section_id)
        ]

    def to_display_dict(self) -> list[dict]:
        """Convert to display-friendly list in contract order."""
        return [
            {
                "id": section_id.value,
                "title": DISPLAY_TITLES[section_id],
                "content": body,
            }
            for section_id, body in self.items()
        ]
