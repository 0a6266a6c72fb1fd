"""
Clients API — CRUD and search over client records.

Every route needs the active role to be allowed into the `clients`
service.
"""

from fastapi import APIRouter, Depends, HTTPException

from igilife.api.deps import require_service
from igilife.portal import Portal
from igilife.schemas.clients import ClientCreate, ClientUpdate
from igilife.services.client_service import filter_clients
from igilife.services.notifications import Notification, Severity

router = APIRouter(prefix="/api/clients", tags=["clients"])

clients_access = require_service("clients")


@router.get("")
async def list_clients(q: str = "",
                       agent_id: str | None = None,
                       portal: Portal = Depends(clients_access)):
    """List clients, optionally for one agent and/or filtered by `q`."""
    if agent_id:
        clients = portal.clients.for_agent(agent_id)
    else:
        clients = portal.clients.list_clients()
    return [c.dump() for c in filter_clients(clients, q)]


@router.get("/{client_id}")
async def get_client(client_id: str, portal: Portal = Depends(clients_access)):
    client = portal.clients.get(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail=f"Client {client_id} not found")
    return client.dump()


@router.post("", status_code=201)
async def add_client(body: ClientCreate, portal: Portal = Depends(clients_access)):
    client = portal.clients.add(body)
    if client is None:
        raise HTTPException(status_code=500, detail="Client could not be saved")
    portal.notifier.notify(Notification(
        title="Client Added",
        description="New client has been successfully registered.",
        severity=Severity.SUCCESS,
    ))
    return client.dump()


@router.put("/{client_id}")
async def update_client(client_id: str, body: ClientUpdate,
                        portal: Portal = Depends(clients_access)):
    if not portal.clients.update(client_id, body):
        raise HTTPException(status_code=404, detail=f"Client {client_id} not found")
    portal.notifier.notify(Notification(
        title="Client Updated",
        description="Client information has been successfully updated.",
        severity=Severity.SUCCESS,
    ))
    return portal.clients.get(client_id).dump()


@router.delete("/{client_id}")
async def delete_client(client_id: str, portal: Portal = Depends(clients_access)):
    if not portal.clients.delete(client_id):
        raise HTTPException(status_code=404, detail=f"Client {client_id} not found")
    portal.notifier.notify(Notification(
        title="Client Deleted",
        description="Client has been successfully deleted.",
        severity=Severity.SUCCESS,
    ))
    return {"ok": True}
