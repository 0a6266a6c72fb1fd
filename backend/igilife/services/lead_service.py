"""
Quote leads — requests for a quote, worked by agents and administrators.

New leads always start as `new` with today's date; the caller never
supplies either.
"""

from datetime import date

from igilife.config import settings
from igilife.schemas.leads import LeadStatus, QuoteLead, QuoteLeadCreate, QuoteLeadUpdate
from igilife.services.records import RecordCollection, generate_id
from igilife.services.store import PersistedStore


def filter_leads(leads: list[QuoteLead], term: str = "", status: LeadStatus | None = None) -> list[QuoteLead]:
    """Name, email and insurance type match case-insensitively; phone as a plain substring."""
    needle = term.lower()
    return [
        lead for lead in leads
        if (status is None or lead.status == status)
        and (
            not term
            or needle in lead.name.lower()
            or needle in lead.email.lower()
            or term in lead.phone
            or needle in lead.insurance_type.lower()
        )
    ]


class QuoteLeadManager(RecordCollection):
    record_model = QuoteLead
    create_model = QuoteLeadCreate
    update_model = QuoteLeadUpdate
    label = "lead"

    def __init__(self, store: PersistedStore, *, key: str | None = None):
        super().__init__(store, key or settings.leads_key)

    def list_leads(self) -> list[QuoteLead]:
        return self.records()

    def search(self, term: str = "", status: LeadStatus | None = None) -> list[QuoteLead]:
        return filter_leads(self.records(), term, status)

    def add(self, data: QuoteLeadCreate | dict) -> QuoteLead | None:
        data = self._parse_new(data)
        if data is None:
            return None
        return self._append(QuoteLead(
            id=generate_id(),
            created_at=date.today().isoformat(),
            status=LeadStatus.NEW,
            **data.model_dump(),
        ))

    def set_status(self, lead_id: str, status: LeadStatus | str) -> bool:
        return self._apply(lead_id, {"status": LeadStatus(status)})

    def status_counts(self) -> dict[str, int]:
        leads = self.records()
        return {s.value: sum(1 for lead in leads if lead.status == s) for s in LeadStatus}
