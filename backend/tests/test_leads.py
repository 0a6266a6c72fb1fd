"""Tests for quote leads: the manager and the leads API."""

import json
from datetime import date

import pytest

from igilife.config import settings
from igilife.schemas.leads import LeadStatus
from igilife.services.lead_service import QuoteLeadManager

QUOTE = {
    "name": "Omar Farooq",
    "email": "omar@example.com",
    "phone": "+92-300-7654321",
    "insuranceType": "car-insurance",
    "message": "Corolla 2021, comprehensive cover",
}


@pytest.fixture
def leads(store) -> QuoteLeadManager:
    return QuoteLeadManager(store)


class TestQuoteLeadManager:
    def test_starts_empty_and_persists_key(self, leads, store):
        assert leads.list_leads() == []
        assert store.read(settings.leads_key) == "[]"

    def test_new_lead_is_new_and_dated_today(self, leads, store):
        lead = leads.add(QUOTE)
        assert lead.status == LeadStatus.NEW
        assert lead.created_at == date.today().isoformat()
        stored = json.loads(store.read(settings.leads_key))
        assert stored[0]["insuranceType"] == "car-insurance"
        assert stored[0]["status"] == "new"

    def test_status_cannot_be_supplied_on_create(self, leads):
        lead = leads.add({**QUOTE, "status": "converted"})
        assert lead.status == LeadStatus.NEW

    def test_missing_field_rejected(self, leads):
        assert leads.add({"name": "Omar"}) is None
        assert leads.add({**QUOTE, "phone": ""}) is None
        assert leads.list_leads() == []

    def test_status_update_and_delete(self, leads):
        lead = leads.add(QUOTE)
        assert leads.set_status(lead.id, "contacted") is True
        assert leads.get(lead.id).status == LeadStatus.CONTACTED
        assert leads.update(lead.id, {"assignedAgent": "AGT001"}) is True
        assert leads.get(lead.id).assigned_agent == "AGT001"
        assert leads.delete(lead.id) is True
        assert leads.delete(lead.id) is False

    def test_update_unknown(self, leads):
        assert leads.update("nope", {"status": "closed"}) is False

    def test_search_and_status_filter(self, leads):
        first = leads.add(QUOTE)
        leads.add({**QUOTE, "name": "Hina Raza", "email": "hina@example.com",
                   "phone": "+92-333-0000000", "insuranceType": "travel-insurance"})
        leads.set_status(first.id, "quoted")

        assert [lead.name for lead in leads.search("TRAVEL")] == ["Hina Raza"]
        assert [lead.name for lead in leads.search("7654321")] == ["Omar Farooq"]
        assert [lead.name for lead in leads.search(status=LeadStatus.QUOTED)] == ["Omar Farooq"]
        assert leads.search("hina", LeadStatus.QUOTED) == []

    def test_status_counts(self, leads):
        leads.add(QUOTE)
        counts = leads.status_counts()
        assert counts["new"] == 1
        assert set(counts) == {"new", "contacted", "quoted", "converted", "closed"}


@pytest.mark.asyncio
class TestLeadsApi:
    async def test_client_requests_quote(self, client_user_client, portal, notifier):
        resp = await client_user_client.post("/api/leads", json=QUOTE)
        assert resp.status_code == 201
        assert resp.json()["status"] == "new"
        assert "Quote Request Submitted!" in notifier.titles

        tracked = portal.user_services.for_user("3")
        assert [(s.service_type, s.service_name, s.status.value) for s in tracked] == [
            ("car-insurance", "Car Insurance", "requested"),
        ]

    async def test_quote_requires_login(self, anon_client):
        resp = await anon_client.post("/api/leads", json=QUOTE)
        assert resp.status_code == 401

    async def test_client_cannot_work_leads(self, client_user_client):
        resp = await client_user_client.get("/api/leads")
        assert resp.status_code == 403

    async def test_agent_works_leads(self, agent_client, portal, notifier):
        lead = portal.leads.add(QUOTE)

        resp = await agent_client.get("/api/leads", params={"status": "new"})
        assert [item["id"] for item in resp.json()] == [lead.id]

        resp = await agent_client.put(f"/api/leads/{lead.id}", json={"status": "contacted"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "contacted"
        assert "Status Updated" in notifier.titles

        resp = await agent_client.get("/api/leads/stats")
        assert resp.json()["contacted"] == 1
        assert resp.json()["total"] == 1

        resp = await agent_client.delete(f"/api/leads/{lead.id}")
        assert resp.status_code == 200
        resp = await agent_client.delete(f"/api/leads/{lead.id}")
        assert resp.status_code == 404

    async def test_unknown_status_rejected(self, agent_client, portal):
        lead = portal.leads.add(QUOTE)
        resp = await agent_client.put(f"/api/leads/{lead.id}", json={"status": "won"})
        assert resp.status_code == 422
