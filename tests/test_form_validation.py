"""Tests for trip request validation."""
import pytest
from datetime import date
from pydantic import ValidationError

from app.models.form_schema import INTEREST_CATALOG, Interest, TripRequest


def valid_data(**overrides) -> dict:
    data = {
        "source": "Berlin",
        "destination": "Rome",
        "start_date": "2026-09-10",
        "end_date": "2026-09-14",
        "budget": "$1500",
        "travelers": 3,
        "interests": ["Food", "History"],
    }
    data.update(overrides)
    return data


class TestTripRequest:
    """Test TripRequest validation and helpers."""

    def test_valid_request(self):
        request = TripRequest(**valid_data())

        assert request.start_date == date(2026, 9, 10)
        assert request.travelers == 3
        assert request.interests == frozenset({Interest.FOOD, Interest.HISTORY})
        assert request.duration_days == 5

    def test_text_is_trimmed(self):
        request = TripRequest(**valid_data(source="  Berlin  "))
        assert request.source == "Berlin"

    def test_catalog_matches_form(self):
        assert INTEREST_CATALOG == ["Adventure", "Nature", "Food", "History", "Relaxation", "Nightlife"]

    def test_sorted_interests_follow_catalog(self):
        request = TripRequest(**valid_data(interests=["Nightlife", "Nature", "Adventure"]))
        assert request.sorted_interests() == ["Adventure", "Nature", "Nightlife"]

    def test_same_day_trip_allowed(self):
        request = TripRequest(**valid_data(end_date="2026-09-10"))
        assert request.duration_days == 1

    def test_validation_constraints(self):
        """Test field validation constraints."""
        # travelers must be >= 1
        with pytest.raises(ValidationError):
            TripRequest(**valid_data(travelers=0))

        # text fields must not be blank
        with pytest.raises(ValidationError):
            TripRequest(**valid_data(destination="   "))

        # start must not be after end
        with pytest.raises(ValidationError):
            TripRequest(**valid_data(start_date="2026-09-15"))

        # interests come from the catalog
        with pytest.raises(ValidationError):
            TripRequest(**valid_data(interests=["Shopping"]))

    def test_immutable(self):
        request = TripRequest(**valid_data())
        with pytest.raises(ValidationError):
            request.destination = "Paris"
