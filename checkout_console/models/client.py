"""Customer directory models"""

from pydantic import BaseModel
from typing import Optional


class Client(BaseModel):
    """Customer record owned by the remote directory"""
    id: int
    name: str
    phone: str = ""
    email: Optional[str] = None
    location: Optional[str] = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, phone or email"""
        needle = query.lower()
        return any(
            needle in (value or "").lower()
            for value in (self.name, self.phone, self.email)
        )
