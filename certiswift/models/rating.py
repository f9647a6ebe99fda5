"""
Course Rating Model Module
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

MIN_RATING = 1
MAX_RATING = 5


@dataclass
class CourseRating:
    course_id: int
    user_name: str
    rating: int
    review: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'CourseRating':
        return cls(
            id=record.get('id'),
            course_id=record.get('course_id'),
            user_name=record.get('user_name', ''),
            rating=int(record.get('rating') or 0),
            review=record.get('review'),
            created_at=record.get('created_at'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def average_rating(ratings: List[CourseRating]) -> str:
    """
    Arithmetic mean of the rating values, formatted with one decimal.
    Returns "0.0" when there are no ratings.
    """
    if not ratings:
        return "0.0"
    mean = sum(r.rating for r in ratings) / len(ratings)
    return f"{mean:.1f}"
