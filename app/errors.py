"""
Error taxonomy for the travel planner.
Configuration and generation failures end a request in the failed state;
parse degradation is never an error (see services.section_parser).
"""


class TravelPlannerError(Exception):
    """Base class for all planner errors."""


class ConfigurationError(TravelPlannerError):
    """Missing or invalid configuration, detected before any network call."""


class GenerationError(TravelPlannerError):
    """The text-generation service rejected or failed the call."""


class RequestInFlightError(TravelPlannerError):
    """A submission arrived while the same operation slot was still loading."""

    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(f"A {slot} request is already in progress. Please wait for it to finish.")


class NoPlanError(TravelPlannerError):
    """Chat was used before a travel plan was generated."""

    def __init__(self):
        super().__init__("Generate a travel plan to start chatting.")
