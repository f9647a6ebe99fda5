"""
Admin Model Module
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Admin:
    """An admin account. The password column holds a werkzeug password hash."""
    email: str
    password: str
    id: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Admin':
        return cls(
            id=record.get('id'),
            email=record.get('email', ''),
            password=record.get('password') or '',
            created_at=record.get('created_at'),
        )
