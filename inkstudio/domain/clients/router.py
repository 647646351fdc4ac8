"""Client router - FastAPI endpoints for client operations"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.responses import ok
from .schemas import ClientCreate, ClientResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


def _dump(client) -> dict:
    return ClientResponse.from_model(client).model_dump(mode="json")


@router.get("")
async def get_clients(service: ClientService = Depends(get_client_service)):
    """Get all clients, newest first"""
    return ok([_dump(c) for c in service.get_clients()])


@router.get("/problem")
async def get_problem_clients(
    minNoShow: int = Query(1, ge=0),
    limit: int = Query(50, ge=1, le=500),
    service: ClientService = Depends(get_client_service),
):
    """Clients with repeated no-shows"""
    return ok([_dump(c) for c in service.get_problem_clients(minNoShow, limit)])


@router.get("/{client_id}")
async def get_client(client_id: int, service: ClientService = Depends(get_client_service)):
    return ok(_dump(service.get_client(client_id)))


@router.post("", status_code=201)
async def create_client(data: ClientCreate, service: ClientService = Depends(get_client_service)):
    """Create a new client"""
    return ok(_dump(service.create_client(data)))


@router.put("/{client_id}")
async def update_client(
    client_id: int,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    """Update a client"""
    return ok(_dump(service.update_client(client_id, data)))


@router.delete("/{client_id}")
async def delete_client(client_id: int, service: ClientService = Depends(get_client_service)):
    """Delete a client"""
    return ok(service.delete_client(client_id))


__all__ = [
    "router",
    "get_clients",
    "get_problem_clients",
    "get_client",
    "create_client",
    "update_client",
    "delete_client",
]
