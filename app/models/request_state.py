"""
Request state - Tagged state of one operation slot (plan generation or chat).
"""
from pydantic import BaseModel, Field
from typing import Any, Optional
from datetime import datetime
from enum import Enum


class RequestStatus(str, Enum):
    """Lifecycle status of an operation slot."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RequestState(BaseModel):
    """Current state of an operation slot. Payload is set only on success, error only on failure."""
    status: RequestStatus = Field(
        default=RequestStatus.IDLE,
        description="Current lifecycle status"
    )
    payload: Optional[Any] = Field(
        None,
        description="Result of the operation when it succeeded"
    )
    error: Optional[str] = Field(
        None,
        description="Human-readable failure reason"
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="When the state was entered"
    )

    @classmethod
    def idle(cls) -> "RequestState":
        return cls(status=RequestStatus.IDLE)

    @classmethod
    def loading(cls) -> "RequestState":
        return cls(status=RequestStatus.LOADING)

    @classmethod
    def succeeded(cls, payload: Any = None) -> "RequestState":
        return cls(status=RequestStatus.SUCCEEDED, payload=payload)

    @classmethod
    def failed(cls, reason: str) -> "RequestState":
        return cls(status=RequestStatus.FAILED, error=reason)

    @property
    def is_loading(self) -> bool:
        return self.status == RequestStatus.LOADING

    def to_display_dict(self) -> dict:
        """Presentation view; payload is omitted since it is exposed elsewhere."""
        return {
            "status": self.status.value,
            "error": self.error,
            "updated_at": self.updated_at.isoformat(),
        }
