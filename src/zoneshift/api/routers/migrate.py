"""Migration API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from zoneshift.api.dependencies import get_orchestrator, lookup_account
from zoneshift.core.migrate.orchestrator import MigrationOrchestrator
from zoneshift.core.models import Zone

router = APIRouter()


class OpenRequest(BaseModel):
    account: str
    zone: str


class DestinationRequest(BaseModel):
    account: str | None = None
    instance: int | str | None = None
    zone_name: str | None = None
    confirmed: bool | None = None


class EditRequest(BaseModel):
    data: str


def _session_response(orchestrator: MigrationOrchestrator) -> dict:
    session = orchestrator.session
    if session is None:
        raise HTTPException(status_code=404, detail="No migration session")
    return {
        "session": session.model_dump(mode="json"),
        "plan": orchestrator.plan().model_dump(mode="json"),
    }


@router.post("/session")
async def open_session(
    request: OpenRequest,
    orchestrator: MigrationOrchestrator = Depends(get_orchestrator),
):
    """Start a migration session, replacing any session not being committed."""
    account = lookup_account(request.account)
    await orchestrator.open(account, Zone(name=request.zone))
    return _session_response(orchestrator)


@router.get("/session")
async def get_session(orchestrator: MigrationOrchestrator = Depends(get_orchestrator)):
    """Current session, including progress while committing."""
    return _session_response(orchestrator)


@router.delete("/session")
async def close_session(orchestrator: MigrationOrchestrator = Depends(get_orchestrator)):
    orchestrator.reset()
    return {"status": "closed"}


@router.put("/session/destination")
async def update_destination(
    request: DestinationRequest,
    orchestrator: MigrationOrchestrator = Depends(get_orchestrator),
):
    """Change destination account, droplet, zone name or confirmation."""
    if request.account is not None:
        await orchestrator.change_destination_account(lookup_account(request.account))
    if request.instance is not None:
        orchestrator.select_destination_instance(request.instance)
    if request.zone_name is not None:
        orchestrator.set_destination_zone_name(request.zone_name)
    if request.confirmed is not None:
        orchestrator.set_confirmation(request.confirmed)
    return _session_response(orchestrator)


@router.put("/session/records/{record_id}")
async def edit_record(
    record_id: int,
    request: EditRequest,
    orchestrator: MigrationOrchestrator = Depends(get_orchestrator),
):
    """Override the data of one proposed record."""
    orchestrator.edit_record(record_id, request.data)
    return _session_response(orchestrator)


@router.get("/plan")
async def get_plan(orchestrator: MigrationOrchestrator = Depends(get_orchestrator)):
    """Classify the pending commit."""
    return orchestrator.plan().model_dump(mode="json")


@router.post("/commit")
async def commit(orchestrator: MigrationOrchestrator = Depends(get_orchestrator)):
    """Apply the session. Provider failures are reported in the session, not as errors."""
    await orchestrator.commit()
    return _session_response(orchestrator)
