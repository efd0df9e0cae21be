"""
API Routes for Travel Planner.
"""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

from ..errors import NoPlanError, RequestInFlightError
from ..models.form_schema import INTEREST_CATALOG, TripRequest
from ..models.request_state import RequestState, RequestStatus
from ..models.sections import DISPLAY_TITLES, PROMPT_TITLES, SectionId
from ..models.session import Session, session_store
from ..services.flow_controller import get_flow_controller


router = APIRouter(prefix="/api", tags=["travel-planner"])


# Request/Response Models
class CreateSessionResponse(BaseModel):
    session_id: str
    message: str


class PlanResponse(BaseModel):
    state: dict
    sections: Optional[list[dict]] = None
    missing_sections: list[str] = []


class ChatRequest(BaseModel):
    session_id: str
    message: str


class ChatResponse(BaseModel):
    state: dict
    reply: Optional[str] = None
    has_unread: bool = False


class VisibilityRequest(BaseModel):
    active: bool


class StateResponse(BaseModel):
    plan: dict
    chat: dict
    has_plan: bool
    has_unread: bool
    chat_active: bool
    notifications: list[dict]


def _get_session(session_id: str) -> Session:
    session = session_store.get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _plan_response(session: Session, state: RequestState) -> PlanResponse:
    if session.sections is None:
        return PlanResponse(state=state.to_display_dict())
    return PlanResponse(
        state=state.to_display_dict(),
        sections=session.sections.to_display_dict(),
        missing_sections=[section_id.value for section_id in session.sections.placeholders()]
    )


# Endpoints

@router.post("/session", response_model=CreateSessionResponse)
async def create_session():
    """Create a new planning session."""
    session = session_store.create()
    return CreateSessionResponse(
        session_id=session.session_id,
        message="Plan your perfect trip with our AI-powered travel assistant. Fill in the form to get started."
    )


@router.get("/form/options")
async def get_form_options():
    """Interest catalog and the section titles a plan is made of."""
    return {
        "interests": INTEREST_CATALOG,
        "sections": [
            {
                "id": section_id.value,
                "number": number,
                "title": DISPLAY_TITLES[section_id],
                "prompt_title": PROMPT_TITLES[section_id],
            }
            for number, section_id in enumerate(SectionId, start=1)
        ],
    }


@router.post("/plan/{session_id}", response_model=PlanResponse)
async def submit_plan(session_id: str, request: TripRequest):
    """Generate a travel plan. A new plan replaces the old one and clears the chat."""
    session = _get_session(session_id)
    flow = get_flow_controller()

    try:
        state = await flow.submit_plan(session, request)
    except RequestInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _plan_response(session, state)


@router.get("/plan/{session_id}", response_model=PlanResponse)
async def get_plan(session_id: str):
    """Get the current plan."""
    session = _get_session(session_id)
    return _plan_response(session, session.plan_slot.state)


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """Ask a question about the current plan."""
    session = _get_session(request.session_id)
    question = request.message.strip()
    if not question:
        raise HTTPException(status_code=400, detail="Message must not be empty")

    flow = get_flow_controller()
    try:
        state = await flow.ask(session, question)
    except NoPlanError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RequestInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ChatResponse(
        state=state.to_display_dict(),
        reply=state.payload if state.status == RequestStatus.SUCCEEDED else None,
        has_unread=session.has_unread
    )


@router.get("/messages/{session_id}")
async def get_messages(session_id: str):
    """Get all chat messages for a session."""
    session = _get_session(session_id)
    return {
        "messages": [
            {
                "role": msg.role,
                "content": msg.content,
                "timestamp": msg.timestamp.isoformat()
            }
            for msg in session.messages
        ]
    }


@router.put("/chat/{session_id}/visibility")
async def set_chat_visibility(session_id: str, request: VisibilityRequest):
    """Record that the chat surface was opened or collapsed."""
    session = _get_session(session_id)
    session.set_chat_active(request.active)
    session_store.update(session)
    return {"chat_active": session.unread.active, "has_unread": session.has_unread}


@router.get("/state/{session_id}", response_model=StateResponse)
async def get_state(session_id: str):
    """Loading/error state of both slots, unread flag and active notifications."""
    session = _get_session(session_id)
    return StateResponse(**session.get_state_summary())


@router.delete("/notifications/{session_id}/{notification_id}")
async def dismiss_notification(session_id: str, notification_id: str):
    """Dismiss a notification."""
    session = _get_session(session_id)
    if not session.notifications.dismiss(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True}
