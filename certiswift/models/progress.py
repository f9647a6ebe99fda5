"""
Course Progress Model Module
Defines the CourseProgress row and the ProgressTracker arithmetic
"""
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

MIN_PERCENTAGE = 0.0
MAX_PERCENTAGE = 100.0

# Flat increment of the "+10%" action
DEFAULT_INCREMENT = 10.0

# Total course length assumed by the remaining-time estimate
ESTIMATED_COURSE_HOURS = 10


def clamp_percentage(value: float) -> float:
    """Clamp a percentage into [0, 100]."""
    return max(MIN_PERCENTAGE, min(float(value), MAX_PERCENTAGE))


def is_completed(percentage: float) -> bool:
    return percentage >= MAX_PERCENTAGE


@dataclass
class CourseProgress:
    """
    Course Progress Model
    One row per (user_id, course_id) in the course_progress table
    """
    user_id: str
    course_id: int
    progress_percentage: float = 0.0
    completed: bool = False
    last_accessed: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'CourseProgress':
        percentage = float(record.get('progress_percentage') or 0.0)
        return cls(
            id=record.get('id'),
            user_id=record.get('user_id', ''),
            course_id=record.get('course_id'),
            progress_percentage=percentage,
            completed=bool(record.get('completed', is_completed(percentage))),
            last_accessed=record.get('last_accessed'),
            created_at=record.get('created_at'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProgressTracker:
    """
    Percentage accumulator for one user on one course.

    The percentage always stays within [0, 100] and completion is derived
    from it, never set on its own.
    """
    percentage: float = 0.0
    total_modules: int = 10
    started: bool = False

    def __post_init__(self):
        if self.total_modules < 1:
            raise ValueError("total_modules must be at least 1")
        self.percentage = clamp_percentage(self.percentage)

    @classmethod
    def from_progress(cls, progress: Optional[CourseProgress], total_modules: int = 10) -> 'ProgressTracker':
        if progress is None:
            return cls(0.0, total_modules, started=False)
        return cls(progress.progress_percentage, total_modules, started=True)

    @property
    def completed(self) -> bool:
        return is_completed(self.percentage)

    @property
    def module_increment(self) -> float:
        return MAX_PERCENTAGE / self.total_modules

    def set(self, percentage: float) -> float:
        self.percentage = clamp_percentage(percentage)
        return self.percentage

    def add(self, increment: float = DEFAULT_INCREMENT) -> float:
        return self.set(self.percentage + increment)

    def complete_module(self) -> float:
        return self.add(self.module_increment)

    @property
    def completed_modules(self) -> int:
        return math.floor(self.percentage / MAX_PERCENTAGE * self.total_modules)

    @property
    def status(self) -> str:
        if not self.started:
            return "Not Started"
        if self.completed:
            return "Completed"
        if self.percentage > 0:
            return "In Progress"
        return "Started"

    @property
    def estimated_hours_remaining(self) -> Optional[int]:
        if not self.started or self.completed:
            return None
        remaining = MAX_PERCENTAGE - self.percentage
        return math.ceil(remaining / MAX_PERCENTAGE * ESTIMATED_COURSE_HOURS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'progress_percentage': self.percentage,
            'completed': self.completed,
            'status': self.status,
            'total_modules': self.total_modules,
            'completed_modules': self.completed_modules,
            'estimated_hours_remaining': self.estimated_hours_remaining,
        }
