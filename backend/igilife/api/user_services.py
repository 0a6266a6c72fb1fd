"""
User services API — services provided to clients, and each user's own list.

Providing and managing services needs access to `service-provision`.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from igilife.api.deps import get_current_user, get_portal, require_service
from igilife.portal import Portal
from igilife.schemas.user_services import ServiceStatus, UserServiceCreate, UserServiceUpdate
from igilife.schemas.users import User
from igilife.services.notifications import Notification, Severity

router = APIRouter(prefix="/api/user-services", tags=["user-services"])

provision_access = require_service("service-provision")


@router.get("/mine")
async def my_services(portal: Portal = Depends(get_portal),
                      user: User = Depends(get_current_user)):
    """Services held by the logged-in user."""
    return [s.dump() for s in portal.user_services.for_user(user.id)]


@router.get("")
async def list_services(user_id: str | None = None,
                        portal: Portal = Depends(provision_access)):
    services = portal.user_services.for_user(user_id) if user_id else portal.user_services.list_services()
    return [s.dump() for s in services]


@router.post("", status_code=201)
async def provide_service(body: UserServiceCreate,
                          portal: Portal = Depends(provision_access),
                          user: User = Depends(get_current_user)):
    """Provide a service to a user. It starts active unless a status is given."""
    fields = body.model_fields_set
    if "status" not in fields:
        body.status = ServiceStatus.ACTIVE
    if body.status == ServiceStatus.ACTIVE and not body.activation_date:
        body.activation_date = datetime.now(timezone.utc).isoformat()
    if not body.policy_no:
        body.policy_no = f"IGI-{body.service_type.upper()}-{int(time.time() * 1000)}"
    body.details = {"providedBy": user.name, "providedById": user.id, **body.details}

    service = portal.user_services.add(body)
    if service is None:
        raise HTTPException(
            status_code=409,
            detail=f"{body.service_name} is already on record for this user",
        )
    portal.notifier.notify(Notification(
        title="Service Provided Successfully!",
        description=f"{service.service_name} has been provided. They can now see it in their portal.",
        severity=Severity.SUCCESS,
    ))
    return service.dump()


@router.put("/{service_id}")
async def update_service(service_id: str, body: UserServiceUpdate,
                         portal: Portal = Depends(provision_access)):
    if not portal.user_services.update(service_id, body):
        raise HTTPException(status_code=404, detail=f"Service {service_id} not found")
    portal.notifier.notify(Notification(
        title="Status Updated",
        description="Service status has been updated successfully.",
        severity=Severity.SUCCESS,
    ))
    return portal.user_services.get(service_id).dump()


@router.delete("/{service_id}")
async def delete_service(service_id: str, portal: Portal = Depends(provision_access)):
    if not portal.user_services.delete(service_id):
        raise HTTPException(status_code=404, detail=f"Service {service_id} not found")
    return {"ok": True}
