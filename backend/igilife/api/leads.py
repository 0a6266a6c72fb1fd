"""
Quote leads API.

Any logged-in user can ask for a quote; the request is also tracked as
a `requested` service on their account. Working the leads (list, status
changes, deletion) needs access to `leads-management`.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from igilife.api.deps import get_current_user, get_portal, require_service
from igilife.auth.navigation import INSURANCE_SERVICES
from igilife.portal import Portal
from igilife.schemas.leads import LeadStatus, QuoteLeadCreate, QuoteLeadUpdate
from igilife.schemas.user_services import ServiceStatus, UserServiceCreate
from igilife.schemas.users import User
from igilife.services.notifications import Notification, Severity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leads", tags=["leads"])

leads_access = require_service("leads-management")

SERVICE_LABELS = {item.id: item.label for item in INSURANCE_SERVICES}


@router.post("", status_code=201)
async def request_quote(body: QuoteLeadCreate,
                        portal: Portal = Depends(get_portal),
                        user: User = Depends(get_current_user)):
    lead = portal.leads.add(body)
    if lead is None:
        raise HTTPException(status_code=500, detail="Quote request could not be saved")

    tracked = portal.user_services.add(UserServiceCreate(
        user_id=user.id,
        service_type=lead.insurance_type,
        service_name=SERVICE_LABELS.get(lead.insurance_type, "Insurance Quote"),
        status=ServiceStatus.REQUESTED,
        details={
            "name": lead.name,
            "email": lead.email,
            "phone": lead.phone,
            "message": lead.message,
            "quoteType": "general",
        },
    ))
    if tracked is None:
        logger.info("Quote %s not tracked as a new service for %s", lead.id, user.id)

    portal.notifier.notify(Notification(
        title="Quote Request Submitted!",
        description="Our team will contact you within 24 hours with a personalized quote.",
        severity=Severity.SUCCESS,
    ))
    return lead.dump()


@router.get("")
async def list_leads(q: str = "",
                     status: LeadStatus | None = None,
                     portal: Portal = Depends(leads_access)):
    return [lead.dump() for lead in portal.leads.search(q, status)]


@router.get("/stats")
async def lead_stats(portal: Portal = Depends(leads_access)):
    counts = portal.leads.status_counts()
    return {"total": sum(counts.values()), **counts}


@router.put("/{lead_id}")
async def update_lead(lead_id: str, body: QuoteLeadUpdate,
                      portal: Portal = Depends(leads_access)):
    if not portal.leads.update(lead_id, body):
        raise HTTPException(status_code=404, detail=f"Lead {lead_id} not found")
    lead = portal.leads.get(lead_id)
    portal.notifier.notify(Notification(
        title="Status Updated",
        description=f"Lead status has been updated to {lead.status.value}.",
        severity=Severity.SUCCESS,
    ))
    return lead.dump()


@router.delete("/{lead_id}")
async def delete_lead(lead_id: str, portal: Portal = Depends(leads_access)):
    if not portal.leads.delete(lead_id):
        raise HTTPException(status_code=404, detail=f"Lead {lead_id} not found")
    portal.notifier.notify(Notification(
        title="Lead Deleted",
        description="The lead has been successfully deleted.",
        severity=Severity.SUCCESS,
    ))
    return {"ok": True}
