"""
User Favorite Model Module
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class UserFavorite:
    user_id: str
    course_id: int
    id: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'UserFavorite':
        return cls(
            id=record.get('id'),
            user_id=record.get('user_id', ''),
            course_id=record.get('course_id'),
            created_at=record.get('created_at'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
