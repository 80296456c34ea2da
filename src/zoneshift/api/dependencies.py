"""Shared application state and FastAPI dependencies."""

from fastapi import HTTPException

from zoneshift.core.base import BaseProviderClient
from zoneshift.core.migrate.orchestrator import MigrationOrchestrator
from zoneshift.core.models import Account


class AppState:
    client: BaseProviderClient | None = None
    orchestrator: MigrationOrchestrator | None = None
    accounts: dict[str, Account] = {}


state = AppState()


def get_client() -> BaseProviderClient:
    """Dependency to get the provider client."""
    if not state.client:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return state.client


def get_orchestrator() -> MigrationOrchestrator:
    """Dependency to get the process-wide orchestrator (one migration at a time)."""
    if not state.orchestrator:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return state.orchestrator


def get_accounts() -> dict[str, Account]:
    return state.accounts


def lookup_account(name: str) -> Account:
    account = state.accounts.get(name)
    if account is None:
        raise HTTPException(status_code=404, detail=f"Unknown account: {name}")
    return account
