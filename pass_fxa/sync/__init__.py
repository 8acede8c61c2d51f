"""Reconciliation engine for pass-fxa - extraction, policy and diffing."""

from .comparator import LoginComparator, SyncAction, SyncDecision, decisions_to_jobs
from .credentials import CredentialSelector
from .engine import LocalState, Operation, SyncEngine
from .extractor import LoginExtractor
from .filters import FilterMode, resolve_filter_mode
from .operations import SyncOperations

__all__ = [
    "SyncEngine",
    "Operation",
    "LocalState",
    "SyncOperations",
    "LoginExtractor",
    "FilterMode",
    "resolve_filter_mode",
    "CredentialSelector",
    "LoginComparator",
    "SyncAction",
    "SyncDecision",
    "decisions_to_jobs",
]
