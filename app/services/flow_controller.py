"""
Flow Controller - Runs plan generation and chat turns for a session.
Each operation goes through its slot's RequestLifecycle, so loading,
error and notification handling is the same for both.
"""
import logging
from typing import Optional

from .planner import TravelPlanner, get_planner
from ..errors import NoPlanError
from ..models.form_schema import TripRequest
from ..models.request_state import RequestState
from ..models.sections import TravelPlanSections
from ..models.session import Session, session_store

logger = logging.getLogger(__name__)


class FlowController:
    """
    Controls the request flow of a session.

    - Plan submission replaces the current plan and clears the chat
    - Chat questions are only accepted once a plan exists
    - Neither slot accepts a second submission while loading
    """

    def __init__(self, planner: Optional[TravelPlanner] = None):
        self.planner = planner or get_planner()

    async def submit_plan(self, session: Session, request: TripRequest) -> RequestState:
        """
        Generate a plan for the session.

        Returns:
            Terminal state of the plan slot

        Raises:
            RequestInFlightError: A plan is already being generated
        """
        def commit(sections: TravelPlanSections):
            session.commit_plan(request, sections)
            session_store.update(session)

        state = await session.plan_slot.run(
            lambda: self.planner.generate_plan(request),
            commit
        )
        logger.info(f"Plan request for session {session.session_id} ended {state.status.value}")
        return state

    async def ask(self, session: Session, question: str) -> RequestState:
        """
        Answer a chat question about the current plan.

        The question and its reply are appended together once the model
        answers. A failed turn leaves the log untouched, and a reply that
        arrives after the plan was replaced is discarded with its question.

        Returns:
            State of the chat slot; payload is the reply text. Idle when
            the reply was discarded

        Raises:
            NoPlanError: No plan has been generated yet
            RequestInFlightError: A reply is still pending
        """
        if not session.has_plan:
            raise NoPlanError()

        request = session.trip_request
        sections = session.sections
        history = list(session.messages)

        def operation():
            return self.planner.answer_question(request, sections, history, question)

        def commit(reply: str) -> bool:
            if session.sections is not sections:
                # Plan was replaced mid-flight; the turn belongs to the old conversation
                logger.info(f"Discarding reply for replaced plan in session {session.session_id}")
                return False
            session.add_message("user", question)
            session.add_message("assistant", reply)
            session_store.update(session)
            return True

        return await session.chat_slot.run(operation, commit)


# Global flow controller
flow_controller: Optional[FlowController] = None


def get_flow_controller() -> FlowController:
    """Get or create the global flow controller."""
    global flow_controller
    if flow_controller is None:
        flow_controller = FlowController()
    return flow_controller
