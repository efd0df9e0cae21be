"""Pytest configuration and shared fakes for the travel planner tests."""
import asyncio
from datetime import date
from typing import Optional

import pytest

from app.config import get_llm_config
from app.models.form_schema import TripRequest
from app.services.llm_client import LLMClient
from app.services.planner import TravelPlanner
from app.services.section_parser import SectionParser


PLAN_REPLY = """Here is your plan!

## 1. Best Travel Options (flights/trains)
Take the 08:10 train.

## 2. Accommodation Suggestions
Hotel Roma near Termini.

## 3. Daily Itinerary
Day 1: Colosseum.

## 4. Food & Dining Options
Carbonara in Trastevere.

## 5. Local Transportation Tips
Buy a 72-hour pass.

## 6. Estimated Cost Breakdown
About $1400 in total.
"""


class FakeLLM:
    """Stands in for LLMClient: records prompts and replies from a script."""

    def __init__(self, replies: Optional[list] = None, block: bool = False):
        self.replies = list(replies or [PLAN_REPLY])
        self.prompts: list[str] = []
        self.release = asyncio.Event() if block else None

    def ensure_configured(self):
        pass

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.release is not None:
            await self.release.wait()
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


class CountingLLMClient(LLMClient):
    """Real client that counts generate calls."""

    def __init__(self, config: dict):
        super().__init__(config)
        self.calls = 0

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        return await super().generate(prompt)


def make_llm_config(**overrides) -> dict:
    config = get_llm_config()
    config.update(overrides)
    return config


def make_planner(llm) -> TravelPlanner:
    return TravelPlanner(llm=llm, parser=SectionParser(), history_turns=0)


@pytest.fixture
def trip_request() -> TripRequest:
    return TripRequest(
        source="Berlin",
        destination="Rome",
        start_date=date(2026, 9, 10),
        end_date=date(2026, 9, 14),
        budget="$1500",
        travelers=2,
        interests=["History", "Food"],
    )
