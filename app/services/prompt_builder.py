"""
Prompt Builder - Renders a trip into model prompts.
The plan prompt carries the numbered six-section contract that the
section parser recovers from the response.
"""
from typing import Sequence

from ..models.form_schema import TripRequest
from ..models.sections import PROMPT_TITLES, SectionId, TravelPlanSections
from .context_builder import build_context, build_trip_header


PLAN_PROMPT_TEMPLATE = """Act as an expert travel planner. Create a detailed travel plan for the following trip:

{trip}

Please provide a comprehensive travel plan with the following sections. Use the exact section numbers and titles as shown below:

{contract}

Start every section with a markdown heading that repeats its number and title, for example "## 1. {first_title}".
For each section, provide detailed information and recommendations. Keep the section numbers and titles exactly as shown above to ensure proper parsing."""


CHAT_ROLE_INSTRUCTION = """You are a helpful travel assistant. Answer the traveler's question using the trip details and travel plan below.
If the plan does not cover something, say so and give your best general advice. Answer in markdown and keep it concise."""


def section_contract() -> str:
    """The numbered section list, 1..6 in SectionId order."""
    return "\n".join(
        f"{number}. {PROMPT_TITLES[section_id]}"
        for number, section_id in enumerate(SectionId, start=1)
    )


def build_plan_prompt(request: TripRequest) -> str:
    """Render a trip into the plan-generation prompt. Pure and deterministic."""
    return PLAN_PROMPT_TEMPLATE.format(
        trip=build_trip_header(request),
        contract=section_contract(),
        first_title=PROMPT_TITLES[SectionId.TRAVEL_OPTIONS],
    )


def build_chat_prompt(
    request: TripRequest,
    sections: TravelPlanSections,
    history: Sequence,
    question: str,
    history_turns: int = 0
) -> str:
    """
    Render a follow-up question into a grounded chat prompt.

    Args:
        request: The submitted trip
        sections: The current parsed plan
        history: Chat messages so far (oldest first)
        question: The latest user question
        history_turns: How many recent messages to replay; 0 replays none

    Returns:
        Role instruction, grounding block, optional recent turns, question
    """
    parts = [
        CHAT_ROLE_INSTRUCTION,
        "",
        build_context(request, sections),
    ]

    recent = list(history)[-history_turns:] if history_turns > 0 else []
    if recent:
        parts.append("")
        parts.append("RECENT CONVERSATION:")
        for message in recent:
            parts.append(f"{message.role.title()}: {message.content}")

    parts.append("")
    parts.append(f"QUESTION: {question.strip()}")
    return "\n".join(parts)
