"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Client
from .schemas import ClientFilter


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session, filters: Optional[ClientFilter] = None) -> list[Client]:
        """Get clients with optional filtering, ordered by name"""
        query = db.query(Client)

        if filters is not None:
            if filters.is_active is not None:
                query = query.filter(Client.is_active == filters.is_active)
            if filters.city:
                query = query.filter(Client.city.ilike(filters.city))
            if filters.state:
                query = query.filter(Client.state.ilike(filters.state))
            if filters.search:
                search_term = f"%{filters.search.lower()}%"
                query = query.filter(
                    (Client.name.ilike(search_term))
                    | (Client.email.ilike(search_term))
                    | (Client.phone.ilike(search_term))
                )

        query = query.order_by(Client.name.asc())

        if filters is not None:
            if filters.limit is not None:
                query = query.limit(filters.limit)
            if filters.offset is not None:
                query = query.offset(filters.offset)

        return query.all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        """Get a specific client by ID"""
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        """Create a new client"""
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        """Delete a client"""
        db.delete(client)
        db.commit()
