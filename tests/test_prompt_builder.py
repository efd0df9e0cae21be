"""Tests for prompt and grounding construction."""
import pytest
from datetime import date

from app.models.form_schema import TripRequest
from app.models.sections import DISPLAY_TITLES, PROMPT_TITLES, SectionId, TravelPlanSections
from app.models.session import ChatMessage
from app.services.context_builder import build_context
from app.services.mock_llm import MockLLMClient
from app.services.prompt_builder import (
    CHAT_ROLE_INSTRUCTION,
    build_chat_prompt,
    build_plan_prompt,
    section_contract,
)
from app.services.section_parser import SectionParser


def make_request(**overrides) -> TripRequest:
    data = {
        "source": "London",
        "destination": "Lisbon",
        "start_date": date(2026, 5, 1),
        "end_date": date(2026, 5, 7),
        "budget": "2000 EUR",
        "travelers": 2,
        "interests": ["History", "Food"],
    }
    data.update(overrides)
    return TripRequest(**data)


def make_sections() -> TravelPlanSections:
    return TravelPlanSections.from_mapping({
        SectionId.TRAVEL_OPTIONS: "Fly direct.",
        SectionId.ITINERARY: "Day 1: Belem.",
    })


class TestPlanPrompt:
    """Plan prompt contents."""

    def test_contains_every_field(self):
        prompt = build_plan_prompt(make_request())

        for value in ["London", "Lisbon", "2026-05-01", "2026-05-07", "2000 EUR"]:
            assert value in prompt
        assert "Number of Travelers: 2" in prompt
        assert "Interests: Food, History" in prompt

    def test_titles_numbered_in_order(self):
        prompt = build_plan_prompt(make_request())

        positions = [
            prompt.index(f"{number}. {PROMPT_TITLES[section_id]}")
            for number, section_id in enumerate(SectionId, start=1)
        ]
        assert positions == sorted(positions)
        assert section_contract() in prompt

    def test_deterministic(self):
        assert build_plan_prompt(make_request()) == build_plan_prompt(make_request())

    def test_interest_order_irrelevant(self):
        first = build_plan_prompt(make_request(interests=["Nightlife", "Adventure", "Food"]))
        second = build_plan_prompt(make_request(interests=["Food", "Nightlife", "Adventure"]))

        assert first == second
        assert "Interests: Adventure, Food, Nightlife" in first

    def test_no_interests(self):
        prompt = build_plan_prompt(make_request(interests=[]))
        assert "Interests: No specific interests" in prompt

    def test_contract_is_parseable(self):
        """A reply that follows the prompt's instructions parses completely."""
        prompt = build_plan_prompt(make_request())
        reply = MockLLMClient()._generate_plan(prompt)

        result = SectionParser().parse_detailed(reply)
        assert result.missing == []
        assert "Lisbon" in result.sections.travel_options


class TestContext:
    """Grounding block for chat."""

    def test_trip_header_and_sections(self):
        context = build_context(make_request(), make_sections())

        assert "From: London" in context
        assert "To: Lisbon" in context
        assert "Dates: 2026-05-01 to 2026-05-07" in context
        assert "Fly direct." in context
        assert "No dining options available." in context

    def test_sections_in_contract_order(self):
        context = build_context(make_request(), make_sections())

        positions = [context.index(f"### {DISPLAY_TITLES[section_id]}") for section_id in SectionId]
        assert positions == sorted(positions)

    def test_deterministic(self):
        assert build_context(make_request(), make_sections()) == build_context(make_request(), make_sections())


class TestChatPrompt:
    """Chat prompt contents."""

    def test_role_context_and_question(self):
        request, sections = make_request(), make_sections()
        prompt = build_chat_prompt(request, sections, [], "  Where should we eat?  ")

        assert prompt.startswith(CHAT_ROLE_INSTRUCTION)
        assert build_context(request, sections) in prompt
        assert prompt.endswith("QUESTION: Where should we eat?")

    def test_history_not_replayed_by_default(self):
        history = [
            ChatMessage(role="user", content="Is May rainy?"),
            ChatMessage(role="assistant", content="Mostly dry."),
        ]
        prompt = build_chat_prompt(make_request(), make_sections(), history, "And June?")

        assert "Is May rainy?" not in prompt
        assert "RECENT CONVERSATION" not in prompt

    def test_recent_history_replayed_when_enabled(self):
        history = [
            ChatMessage(role="user", content="First question"),
            ChatMessage(role="assistant", content="First answer"),
            ChatMessage(role="user", content="Second question"),
            ChatMessage(role="assistant", content="Second answer"),
        ]
        prompt = build_chat_prompt(make_request(), make_sections(), history, "Third?", history_turns=2)

        assert "RECENT CONVERSATION:" in prompt
        assert "User: Second question" in prompt
        assert "Assistant: Second answer" in prompt
        assert "First question" not in prompt
        assert prompt.index("Second answer") < prompt.index("QUESTION: Third?")
