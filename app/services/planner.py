"""
Travel Planner - The two model operations.
Generates a six-section plan from a trip and answers follow-up questions
grounded in that plan.
"""
import logging
from typing import Optional, Sequence

from .llm_client import LLMClient, get_llm_client
from .prompt_builder import build_chat_prompt, build_plan_prompt
from .section_parser import DuplicatePolicy, SectionParser
from ..config import settings
from ..models.form_schema import TripRequest
from ..models.sections import TravelPlanSections

logger = logging.getLogger(__name__)


class TravelPlanner:
    """Builds prompts, calls the model and parses its replies."""

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        parser: Optional[SectionParser] = None,
        history_turns: Optional[int] = None
    ):
        self.llm = llm or get_llm_client()
        self.parser = parser or SectionParser(DuplicatePolicy(settings.section_duplicate_policy))
        self.history_turns = settings.chat_history_turns if history_turns is None else history_turns

    async def generate_plan(self, request: TripRequest) -> TravelPlanSections:
        """
        Generate a travel plan for a submitted trip.

        The credential is checked first, so a missing API key fails
        without sending anything to the model.

        Args:
            request: The submitted trip

        Returns:
            Parsed plan; sections the model left out hold placeholders
        """
        self.llm.ensure_configured()

        prompt = build_plan_prompt(request)
        logger.info(f"Generating plan {request.source} -> {request.destination}")
        text = await self.llm.generate(prompt)

        return self.parser.parse(text)

    async def answer_question(
        self,
        request: TripRequest,
        sections: TravelPlanSections,
        history: Sequence,
        question: str
    ) -> str:
        """
        Answer a follow-up question about the current plan.

        Args:
            request: The trip the plan was generated for
            sections: The current plan
            history: Earlier chat messages, excluding this question
            question: The user's question

        Returns:
            The model's reply as markdown
        """
        self.llm.ensure_configured()

        prompt = build_chat_prompt(request, sections, history, question, self.history_turns)
        reply = await self.llm.generate(prompt)
        return reply.strip()


# Global planner instance
planner: Optional[TravelPlanner] = None


def get_planner() -> TravelPlanner:
    """Get or create the global planner."""
    global planner
    if planner is None:
        planner = TravelPlanner()
    return planner
