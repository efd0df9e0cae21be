"""
Mock LLM Client - Offline demo edition.
Answers plan prompts with a canned plan that follows the section contract
and chat prompts with a short answer built from the grounding block.
No network access.
"""
import re
import logging
from typing import Optional

from ..models.sections import PROMPT_TITLES, SectionId

logger = logging.getLogger(__name__)


class MockLLMClient:
    """Deterministic stand-in for a real provider."""

    def __init__(self):
        self.model = "mock-demo"

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """Route by prompt shape: plan generation or grounded Q&A."""
        prompt = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")

        if "QUESTION:" in prompt:
            return self._answer_question(prompt)
        return self._generate_plan(prompt)

    def _field(self, prompt: str, label: str, default: str) -> str:
        """Read a 'Label: value' line from the prompt."""
        match = re.search(rf"^{re.escape(label)}:\s*(.+)$", prompt, re.MULTILINE)
        return match.group(1).strip() if match else default

    def _generate_plan(self, prompt: str) -> str:
        source = self._field(prompt, "From", "your city")
        destination = self._field(prompt, "To", "your destination")
        budget = self._field(prompt, "Budget", "your budget")
        interests = self._field(prompt, "Interests", "sightseeing")

        bodies = {
            SectionId.TRAVEL_OPTIONS: (
                f"- Compare direct flights from {source} to {destination}.\n"
                "- Trains are worth checking for journeys under five hours."
            ),
            SectionId.ACCOMMODATION: (
                f"- Stay central in {destination} to keep transit short.\n"
                "- Book refundable rooms until plans are firm."
            ),
            SectionId.ITINERARY: (
                f"- **Day 1:** Arrive, check in and walk the old town.\n"
                f"- **Day 2:** A full day around your interests ({interests}).\n"
                "- **Day 3:** Markets in the morning, departure in the evening."
            ),
            SectionId.DINING: (
                f"- Try the local specialities of {destination}.\n"
                "- Reserve one special dinner in advance."
            ),
            SectionId.TRANSPORTATION: (
                "- Buy a multi-day transit pass.\n"
                "- Use licensed taxis late at night."
            ),
            SectionId.COST_BREAKDOWN: (
                f"- Total budget: {budget}\n"
                "- Roughly 40% travel, 35% lodging, 25% food and activities."
            ),
        }

        lines = [f"Here is your travel plan for {destination}!", ""]
        for number, section_id in enumerate(SectionId, start=1):
            lines.append(f"## {number}. {PROMPT_TITLES[section_id]}")
            lines.append(bodies[section_id])
            lines.append("")
        logger.debug(f"Mock plan generated for {destination}")
        return "\n".join(lines).strip()

    def _answer_question(self, prompt: str) -> str:
        destination = self._field(prompt, "To", "your destination")
        question = self._field(prompt, "QUESTION", "your question")
        return (
            f"Good question about {destination}! Regarding \"{question}\": "
            "check the plan sections above for the details, and ask me to expand on any of them."
        )
