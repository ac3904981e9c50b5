"""Client directory models for the mock data API"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class Client(BaseModel):
    """Customer record"""
    id: int
    name: str
    phone: str
    email: Optional[str] = None
    location: Optional[str] = None
    created_by: Optional[int] = None
    created_at: datetime


class ClientCreateRequest(BaseModel):
    """Request to create a customer"""
    name: str = ""
    phone: str = ""
    email: Optional[str] = None
    location: Optional[str] = None
    created_by: Optional[int] = None
