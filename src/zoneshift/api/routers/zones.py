"""Zone listing API endpoints."""

from fastapi import APIRouter, Depends

from zoneshift.api.dependencies import get_client, lookup_account
from zoneshift.core.base import BaseProviderClient

router = APIRouter()


@router.get("")
async def list_zones(account: str, client: BaseProviderClient = Depends(get_client)):
    """List zones of an account."""
    zones = await client.list_zones(lookup_account(account).token)
    return {"account": account, "zones": [z.model_dump() for z in zones]}


@router.get("/{zone}/records")
async def list_records(
    zone: str, account: str, client: BaseProviderClient = Depends(get_client)
):
    """List records of a zone."""
    records = await client.list_zone_records(lookup_account(account).token, zone)
    return {
        "zone": zone,
        "records": [r.model_dump(by_alias=True) for r in records],
    }
