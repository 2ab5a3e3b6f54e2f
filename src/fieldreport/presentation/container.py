"""Composition root.

Builds the object graph once per running application: one database
engine, one store, one mirror client, one session. Controllers are
created on demand and all share the same session.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from fieldreport.application.ports import NetworkStatus, PhotoStorage
from fieldreport.application.services import IncidentSyncService, SessionService
from fieldreport.infrastructure.integration.mirror import RemoteMirrorClient
from fieldreport.infrastructure.persistence import LocalStore
from fieldreport.infrastructure.persistence.sqlalchemy import Database
from fieldreport.infrastructure.security import PasswordHashingService
from fieldreport.infrastructure.system.network_status import (
    DnsNetworkStatus,
    StaticNetworkStatus,
)
from fieldreport.infrastructure.system.photo_storage import LocalPhotoStorage
from fieldreport.presentation.controllers import (
    CreateIncidentController,
    DashboardController,
    IncidentDetailController,
    IncidentListController,
    LoginController,
    RegisterController,
)
from fieldreport_config import Settings, get_settings

logger = logging.getLogger(__name__)


class AppContainer:
    def __init__(  # NOQA: PLR0913
        self,
        store: LocalStore,
        mirror: RemoteMirrorClient,
        photo_storage: PhotoStorage,
        password_service: PasswordHashingService,
    ):
        self.store = store
        self.mirror = mirror
        self.photo_storage = photo_storage
        self.password_service = password_service
        self.session = SessionService(store, password_service)
        self.sync_service = IncidentSyncService(store, mirror)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        network_status: Optional[NetworkStatus] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> AppContainer:
        """Wire the production adapters from settings.

        ``network_status`` and ``transport`` replace the device check and
        the HTTP transport, e.g. to run against a fake endpoint.
        """
        settings = settings or get_settings()
        if network_status is None:
            network_status = (
                DnsNetworkStatus(settings.mirror_host)
                if settings.mirror_enabled
                else StaticNetworkStatus(online=False)
            )

        password_service = PasswordHashingService(rounds=settings.password_hash_rounds)
        store = LocalStore(
            database=Database(settings.database_url),
            password_service=password_service,
            bootstrap_username=settings.bootstrap_username,
            bootstrap_password=settings.bootstrap_password.get_secret_value(),
            bootstrap_full_name=settings.bootstrap_full_name,
            bootstrap_email=settings.bootstrap_email,
        )
        mirror = RemoteMirrorClient(
            base_url=settings.mirror_base_url,
            network_status=network_status,
            timeout=settings.mirror_timeout,
            probe_path=settings.mirror_probe_path,
            collection_path=settings.mirror_collection_path,
            transport=transport,
        )
        return cls(
            store=store,
            mirror=mirror,
            photo_storage=LocalPhotoStorage(settings.photo_dir),
            password_service=password_service,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        await self.store.initialize()

    async def close(self) -> None:
        self.session.logout()
        await self.mirror.close()
        await self.store.close()
        logger.debug("Application container closed")

    async def __aenter__(self) -> AppContainer:
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    def login_controller(self) -> LoginController:
        return LoginController(self.session)

    def register_controller(self) -> RegisterController:
        return RegisterController(self.session)

    def dashboard_controller(self) -> DashboardController:
        return DashboardController(self.session, self.store, self.mirror, self.sync_service)

    def create_incident_controller(self) -> CreateIncidentController:
        return CreateIncidentController(
            self.session,
            self.store,
            self.photo_storage,
            self.sync_service,
        )

    def incident_list_controller(self) -> IncidentListController:
        return IncidentListController(self.store, self.photo_storage)

    def incident_detail_controller(self) -> IncidentDetailController:
        return IncidentDetailController(
            self.store,
            self.mirror,
            self.photo_storage,
            self.sync_service,
        )
