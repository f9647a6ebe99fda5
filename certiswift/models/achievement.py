"""
Achievement Model Module
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class Achievement:
    """A badge earned by a user."""
    user_id: str
    badge_type: str
    badge_name: str
    description: str
    id: Optional[int] = None
    earned_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Achievement':
        return cls(
            id=record.get('id'),
            user_id=record.get('user_id', ''),
            badge_type=record.get('badge_type', ''),
            badge_name=record.get('badge_name', ''),
            description=record.get('description', ''),
            earned_at=record.get('earned_at'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
