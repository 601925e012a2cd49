"""Client router - FastAPI endpoints for client operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ClientCreate, ClientFilter, ClientResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


@router.get("")
def get_clients(
    is_active: Optional[bool] = Query(None),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    service: ClientService = Depends(get_client_service),
):
    """List clients with optional filters"""
    filters = ClientFilter(
        is_active=is_active, city=city, state=state, search=search, limit=limit, offset=offset
    )
    clients = service.get_clients(filters)
    return {"success": True, "data": [ClientResponse.model_validate(c) for c in clients]}


@router.get("/search")
def search_clients(
    q: str = Query(""),
    service: ClientService = Depends(get_client_service),
):
    """Search clients by name, email or phone"""
    clients = service.search_clients(q)
    return {"success": True, "data": [ClientResponse.model_validate(c) for c in clients]}


@router.get("/{client_id}")
def get_client(client_id: int, service: ClientService = Depends(get_client_service)):
    """Get a specific client"""
    return {"success": True, "data": ClientResponse.model_validate(service.get_client(client_id))}


@router.post("", status_code=201)
def create_client(data: ClientCreate, service: ClientService = Depends(get_client_service)):
    """Create a new client"""
    client = service.create_client(data)
    return {"success": True, "data": ClientResponse.model_validate(client)}


@router.put("/{client_id}")
def update_client(
    client_id: int,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    """Update a client"""
    client = service.update_client(client_id, data)
    return {"success": True, "data": ClientResponse.model_validate(client)}


@router.delete("/{client_id}")
def delete_client(client_id: int, service: ClientService = Depends(get_client_service)):
    """Delete a client (blocked while schedules reference it)"""
    return {"success": True, "data": service.delete_client(client_id)}
