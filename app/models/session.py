"""
Session management - Holds the current plan, the chat log and the two
operation slots (plan generation and chat) for one user.
"""
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from typing import Literal, Optional
from datetime import datetime
import uuid

from .form_schema import TripRequest
from .sections import TravelPlanSections
from .unread import UnreadSignal
from ..config import settings
from ..services.lifecycle import RequestLifecycle
from ..services.notifications import NotificationCenter


class ChatMessage(BaseModel):
    """A single message in the conversation."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(..., description="'user' or 'assistant'")
    content: str = Field(..., description="Message content")
    timestamp: datetime = Field(default_factory=datetime.now)


class Session(BaseModel):
    """User session with the current plan and conversation history."""
    session_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique session identifier"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Session creation time"
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="Last update time"
    )

    # Current plan, replaced wholesale by each successful generation
    trip_request: Optional[TripRequest] = Field(
        None,
        description="The trip the current plan was generated for"
    )
    sections: Optional[TravelPlanSections] = Field(
        None,
        description="The current parsed plan"
    )

    # Conversation History
    messages: list[ChatMessage] = Field(
        default_factory=list,
        description="Chat history, append-only for the lifetime of a plan"
    )
    unread: UnreadSignal = Field(
        default_factory=UnreadSignal,
        description="Unread replies while the chat is collapsed"
    )

    _notifications: NotificationCenter = PrivateAttr()
    _plan_slot: RequestLifecycle = PrivateAttr()
    _chat_slot: RequestLifecycle = PrivateAttr()

    def model_post_init(self, context) -> None:
        self._notifications = NotificationCenter()
        self._plan_slot = RequestLifecycle(
            name="plan",
            notifications=self._notifications,
            loading_message="Generating your travel plan...",
            success_message="Your travel plan is ready!",
            success_duration=settings.success_notice_seconds,
        )
        self._chat_slot = RequestLifecycle(
            name="chat",
            notifications=self._notifications,
            loading_message="The travel assistant is typing...",
            success_message="New reply from the travel assistant.",
            success_duration=settings.success_notice_seconds,
        )

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    @property
    def plan_slot(self) -> RequestLifecycle:
        return self._plan_slot

    @property
    def chat_slot(self) -> RequestLifecycle:
        return self._chat_slot

    @property
    def has_plan(self) -> bool:
        return self.sections is not None

    @property
    def has_unread(self) -> bool:
        return self.unread.has_unread(self.messages)

    def add_message(self, role: str, content: str) -> ChatMessage:
        """Append a message to the conversation."""
        msg = ChatMessage(role=role, content=content)
        self.messages.append(msg)
        self.unread.message_appended(self.messages)
        self.updated_at = datetime.now()
        return msg

    def commit_plan(self, request: TripRequest, sections: TravelPlanSections):
        """Replace the current plan; the old conversation goes with it."""
        self.trip_request = request
        self.sections = sections
        self.messages = []
        self.unread.reset()
        self.chat_slot.reset()
        self.updated_at = datetime.now()

    def set_chat_active(self, active: bool):
        """Chat surface opened or collapsed."""
        if active:
            self.unread.activate(self.messages)
        else:
            self.unread.deactivate()
        self.updated_at = datetime.now()

    def get_state_summary(self) -> dict:
        """Loading/error state of both slots plus notifications."""
        return {
            "plan": self.plan_slot.state.to_display_dict(),
            "chat": self.chat_slot.state.to_display_dict(),
            "has_plan": self.has_plan,
            "has_unread": self.has_unread,
            "chat_active": self.unread.active,
            "notifications": [n.to_display_dict() for n in self.notifications.active()],
        }


# In-memory session storage, lost on restart
class SessionStore:
    """Simple in-memory session store."""

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create(self) -> Session:
        """Create a new session."""
        session = Session()
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[Session]:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def update(self, session: Session):
        """Update a session."""
        self._sessions[session.session_id] = session


# Global session store
session_store = SessionStore()
