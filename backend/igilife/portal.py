"""
Portal wiring — builds one owned set of core services over one store.

The API keeps a single `Portal` on `app.state`; tests build their own
against an in-memory database. Nothing in the core reaches for a
process-wide session.
"""

import logging

from igilife.auth.engine import RolePermissionEngine
from igilife.auth.roles import Role
from igilife.database import init_db, make_engine, make_session_factory
from igilife.services.client_service import ClientManager
from igilife.services.lead_service import QuoteLeadManager
from igilife.services.notifications import LogNotifier, Notifier
from igilife.services.provision_service import UserServiceManager
from igilife.services.role_sync import RoleSessionSynchronizer
from igilife.services.session_manager import CredentialSessionManager
from igilife.services.store import PersistedStore

logger = logging.getLogger(__name__)


class Portal:
    def __init__(
        self,
        store: PersistedStore,
        *,
        notifier: Notifier | None = None,
        seed_demo_clients: bool | None = None,
    ):
        self.store = store
        self.notifier = notifier or LogNotifier()
        self.current_view: str | None = None

        self.sessions = CredentialSessionManager(store)
        initial_role = self.sessions.user.role if self.sessions.user else Role.USER
        self.access = RolePermissionEngine(initial_role)
        self.role_sync = RoleSessionSynchronizer(
            self.sessions,
            self.access,
            on_navigate=self.navigate,
            notifier=self.notifier,
        )
        self.clients = ClientManager(store, seed_demo=seed_demo_clients)
        self.leads = QuoteLeadManager(store)
        self.user_services = UserServiceManager(store)

    def navigate(self, view_id: str) -> None:
        logger.info("Navigating to %s", view_id)
        self.current_view = view_id


def build_portal(
    database_url: str | None = None,
    *,
    notifier: Notifier | None = None,
    seed_demo_clients: bool | None = None,
) -> Portal:
    engine = make_engine(database_url)
    init_db(engine)
    store = PersistedStore(make_session_factory(engine))
    return Portal(store, notifier=notifier, seed_demo_clients=seed_demo_clients)
