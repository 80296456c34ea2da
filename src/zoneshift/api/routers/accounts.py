"""Account API endpoints."""

from fastapi import APIRouter, Depends

from zoneshift.api.dependencies import get_accounts, get_client, lookup_account
from zoneshift.core.base import BaseProviderClient
from zoneshift.core.models import Account

router = APIRouter()


@router.get("")
async def list_accounts(accounts: dict[str, Account] = Depends(get_accounts)):
    """List configured account names."""
    return {"accounts": sorted(accounts)}


@router.get("/{name}")
async def verify_account(name: str, client: BaseProviderClient = Depends(get_client)):
    """Fetch provider details for an account."""
    account = lookup_account(name)
    info = await client.get_account(account.token)
    return {"name": account.name, "info": info.model_dump()}
