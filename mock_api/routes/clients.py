"""Client directory routes for the mock data API"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..database.clients import client_db
from ..models.client import Client, ClientCreateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=list[Client])
async def list_clients(user_id: Optional[int] = Query(None, alias="userId")):
    """Clients created by a user"""
    return client_db.list_clients(created_by=user_id)


@router.post("", response_model=Client, status_code=201)
async def create_client(request: ClientCreateRequest):
    """Create a customer; name and phone are required"""
    if not request.name.strip() or not request.phone.strip():
        raise HTTPException(status_code=400, detail="Name and phone are required")

    client = client_db.create_client(request)
    logger.info(f"Client {client.id} created")
    return client
