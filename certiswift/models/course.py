"""
Course Model Module
Defines the Course data model
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

COURSE_TYPES = ('FREE', 'PAID')
DIFFICULTIES = ('Beginner', 'Intermediate', 'Advanced')

# Columns the admin form may write; id and created_at are generated by the store
WRITABLE_FIELDS = (
    'title', 'description', 'provider', 'instructor', 'price', 'type',
    'image_url', 'course_url', 'rating', 'difficulty', 'duration', 'category',
)


@dataclass
class Course:
    """
    Course Model
    Represents a row of the Supabase courses table
    """
    title: str
    description: str
    provider: str
    type: str = 'FREE'
    instructor: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    course_url: Optional[str] = None
    rating: Optional[float] = None
    difficulty: Optional[str] = None
    duration: Optional[str] = None
    category: Optional[str] = None
    id: Optional[int] = None  # Primary key in Supabase
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Course':
        return cls(
            id=record.get('id'),
            title=record.get('title', ''),
            description=record.get('description', ''),
            provider=record.get('provider', ''),
            type=record.get('type', 'FREE'),
            instructor=record.get('instructor'),
            price=record.get('price'),
            image_url=record.get('image_url'),
            course_url=record.get('course_url'),
            rating=record.get('rating'),
            difficulty=record.get('difficulty'),
            duration=record.get('duration'),
            category=record.get('category'),
            created_at=record.get('created_at'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def matches(self, search: str) -> bool:
        """Case-insensitive substring match over title, provider and description."""
        term = search.lower()
        return (
            term in (self.title or '').lower()
            or term in (self.provider or '').lower()
            or term in (self.description or '').lower()
        )


def filter_courses(courses: List[Course], search: str = '', course_type: str = 'all') -> List[Course]:
    """
    Filter a course listing the way the catalog page does.

    @param courses: Courses as returned by the store
    @param search: Free-text search term, ignored when empty
    @param course_type: 'all', 'FREE' or 'PAID'
    @returns: Courses matching both filters, order preserved
    """
    filtered = courses
    if search:
        filtered = [course for course in filtered if course.matches(search)]
    if course_type and course_type != 'all':
        filtered = [course for course in filtered if course.type == course_type]
    return filtered
