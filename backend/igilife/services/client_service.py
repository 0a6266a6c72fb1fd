"""
Client records — CRUD over the client collection.

Lives under its own storage key with no tie to the auth state beyond
the `agentId` attribution, which is not checked against any account.
Only `id` is unique.
"""

from datetime import date

from igilife.config import settings
from igilife.schemas.clients import Client, ClientCreate, ClientList, ClientUpdate
from igilife.seed.demo_data import DEFAULT_CLIENTS
from igilife.services.records import RecordCollection, generate_id
from igilife.services.store import PersistedStore


def filter_clients(clients: list[Client], term: str) -> list[Client]:
    """
    Search clients. Name and email match case-insensitively; national ID
    and contact match as plain substrings.
    """
    if not term:
        return list(clients)
    needle = term.lower()
    return [
        c for c in clients
        if needle in c.name.lower()
        or needle in c.email.lower()
        or term in c.national_id
        or term in c.contact
    ]


class ClientManager(RecordCollection):
    record_model = Client
    create_model = ClientCreate
    update_model = ClientUpdate
    label = "client"

    def __init__(
        self,
        store: PersistedStore,
        *,
        key: str | None = None,
        seed_demo: bool | None = None,
    ):
        super().__init__(store, key or settings.clients_key)
        self.seed_demo = settings.seed_demo_clients if seed_demo is None else seed_demo

    def _seed(self) -> list[Client]:
        return ClientList.validate_python(DEFAULT_CLIENTS) if self.seed_demo else []

    def list_clients(self) -> list[Client]:
        return self.records()

    def search(self, term: str) -> list[Client]:
        return filter_clients(self.records(), term)

    def for_agent(self, agent_id: str) -> list[Client]:
        return [c for c in self.records() if c.agent_id == agent_id]

    def add(self, data: ClientCreate | dict) -> Client | None:
        """Register a client; None when the data is incomplete or cannot be saved."""
        data = self._parse_new(data)
        if data is None:
            return None
        return self._append(Client(
            id=generate_id(),
            created_at=date.today().isoformat(),
            **data.model_dump(),
        ))
