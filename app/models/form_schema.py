"""
Trip Request Schema - The structured input submitted by the travel form.
Immutable once submitted; the prompt and the chat grounding are built from it.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import date
from enum import Enum


class Interest(str, Enum):
    """Fixed catalog of interests offered by the form."""
    ADVENTURE = "Adventure"
    NATURE = "Nature"
    FOOD = "Food"
    HISTORY = "History"
    RELAXATION = "Relaxation"
    NIGHTLIFE = "Nightlife"


INTEREST_CATALOG = [interest.value for interest in Interest]


class TripRequest(BaseModel):
    """
    Trip parameters collected by the form.
    All scalar fields are required; interests may be empty.
    """
    model_config = ConfigDict(frozen=True)

    source: str = Field(
        ..., min_length=1,
        description="Where the trip starts"
    )
    destination: str = Field(
        ..., min_length=1,
        description="Where the trip goes"
    )
    start_date: date = Field(
        ...,
        description="Trip start date"
    )
    end_date: date = Field(
        ...,
        description="Trip end date"
    )
    budget: str = Field(
        ..., min_length=1,
        description="Budget as entered by the user, e.g. '$2000'"
    )
    travelers: int = Field(
        1, ge=1,
        description="Number of travelers"
    )
    interests: frozenset[Interest] = Field(
        default_factory=frozenset,
        description="Selected interests, order irrelevant"
    )

    @field_validator('source', 'destination', 'budget', mode='before')
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode='after')
    def check_dates(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self

    def sorted_interests(self) -> list[str]:
        """Interests in catalog order, so rendering is deterministic."""
        return [interest.value for interest in Interest if interest in self.interests]

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


# Human-readable labels used when rendering a request into text
FIELD_LABELS = {
    "source": "From",
    "destination": "To",
    "dates": "Dates",
    "budget": "Budget",
    "travelers": "Number of Travelers",
    "interests": "Interests",
}
