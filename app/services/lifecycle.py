"""
Request Lifecycle - Single-flight state machine for one operation slot.

idle -> loading -> succeeded | failed -> loading (next submit) ...

A submit while loading is rejected, never queued. The check and the switch
to loading both run before the first await, so on a single event loop no
second call can slip in between them.

A commit that returns False discards a stale result: the slot goes back to
idle with no payload and no notification.
"""
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from ..errors import RequestInFlightError
from ..models.request_state import RequestState
from .notifications import NotificationCenter

logger = logging.getLogger(__name__)

T = TypeVar("T")

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


class RequestLifecycle:
    """Tracks loading/success/error for one slot and drives its notifications."""

    def __init__(
        self,
        name: str,
        notifications: NotificationCenter,
        loading_message: str,
        success_message: str,
        success_duration: float = 3.0
    ):
        self.name = name
        self.notifications = notifications
        self.loading_message = loading_message
        self.success_message = success_message
        self.success_duration = success_duration
        self._state = RequestState.idle()

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def reset(self):
        """Return to idle. Ignored while a request is in flight."""
        if not self.is_loading:
            self._state = RequestState.idle()

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        commit: Callable[[T], Optional[bool]]
    ) -> RequestState:
        """
        Run one operation on this slot.

        Args:
            operation: Zero-argument coroutine factory doing the actual work
            commit: Applies a successful result to session state; returning
                False discards the result

        Returns:
            The resulting state (succeeded, failed, or idle if discarded)

        Raises:
            RequestInFlightError: If the slot is already loading
        """
        if self.is_loading:
            logger.warning(f"Rejected {self.name} submission: request already in flight")
            raise RequestInFlightError(self.name)

        self._state = RequestState.loading()
        progress = self.notifications.loading(self.loading_message)
        failure: Optional[str] = None
        discarded = False

        try:
            payload = await operation()
            if commit(payload) is False:
                logger.info(f"{self.name} result discarded")
                discarded = True
                self._state = RequestState.idle()
            else:
                self._state = RequestState.succeeded(payload)
        except Exception as e:
            logger.exception(f"{self.name} request failed")
            failure = str(e).strip() or GENERIC_FAILURE_MESSAGE
            self._state = RequestState.failed(failure)
        finally:
            # Progress indicator goes away before any terminal notification
            self.notifications.dismiss(progress.notification_id)
            if self._state.is_loading:
                # Cancelled mid-flight (BaseException); leave the slot usable
                self._state = RequestState.failed(GENERIC_FAILURE_MESSAGE)

        if failure is not None:
            self.notifications.error(failure)
        elif not discarded:
            self.notifications.success(self.success_message, self.success_duration)

        return self._state
