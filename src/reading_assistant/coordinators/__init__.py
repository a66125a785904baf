"""Coordinators - Orchestration layer connecting UI with business logic."""

from .app_controller import AppController
from .auth_coordinator import AuthCoordinator
from .history_coordinator import HistoryCoordinator
from .home_coordinator import HomeCoordinator
from .passage_interaction_coordinator import PassageInteractionCoordinator
from .profile_coordinator import ProfileCoordinator
from .session_coordinator import SessionCoordinator

__all__ = [
    "AppController",
    "AuthCoordinator",
    "HistoryCoordinator",
    "HomeCoordinator",
    "PassageInteractionCoordinator",
    "ProfileCoordinator",
    "SessionCoordinator",
]
