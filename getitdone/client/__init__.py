"""Python client for the get IT done API."""
from getitdone.client.api import ApiError, GetItDoneClient
from getitdone.client.optimistic import MutationState, PendingMutation, TaskBoard

__all__ = ["ApiError", "GetItDoneClient", "MutationState", "PendingMutation", "TaskBoard"]
