"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ClientHasSchedulesError, NotFoundError
from ...models import Client
from ...shared.validators import require_text, validate_coordinates
from ..schedules.repository import ScheduleRepository
from .repository import ClientRepository
from .schemas import ClientCreate, ClientFilter, ClientUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "address", "city", "state", "zip_code")


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()
        self.schedule_repo = ScheduleRepository()

    def get_clients(self, filters: Optional[ClientFilter] = None) -> list[Client]:
        """Get clients with optional filtering"""
        return self.repo.get_clients(self.db, filters)

    def search_clients(self, query: str) -> list[Client]:
        """Search clients by name, email or phone; a blank query matches nothing"""
        if not query or not query.strip():
            return []
        return self.repo.get_clients(self.db, ClientFilter(search=query.strip()))

    def get_client(self, client_id: int) -> Client:
        """Get a specific client"""
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    def create_client(self, data: ClientCreate) -> Client:
        """Create a new client with validation"""
        logger.info(f"📥 Creating client {data.name!r}")

        client_data = data.model_dump()
        for field in REQUIRED_FIELDS:
            client_data[field] = require_text(client_data[field], field)
        validate_coordinates(data.latitude, data.longitude)

        return self.repo.create_client(self.db, **client_data, is_active=True)

    def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        """Update a client"""
        client = self.get_client(client_id)

        updates = data.model_dump(exclude_unset=True)
        for field in REQUIRED_FIELDS:
            if updates.get(field) is not None:
                updates[field] = require_text(updates[field], field)

        latitude = updates["latitude"] if updates.get("latitude") is not None else client.latitude
        longitude = updates["longitude"] if updates.get("longitude") is not None else client.longitude
        validate_coordinates(latitude, longitude)

        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: int) -> dict:
        """Delete a client that no schedule references"""
        client = self.get_client(client_id)

        schedule_count = self.schedule_repo.count_for_client(self.db, client_id)
        if schedule_count > 0:
            logger.warning(f"⚠️ Client {client_id} has {schedule_count} schedules, refusing delete")
            raise ClientHasSchedulesError(
                f"Cannot delete client: client has {schedule_count} associated schedules"
            )

        self.repo.delete_client(self.db, client)
        logger.info(f"🗑️ Deleted client {client_id}")
        return {"message": "Client deleted"}
