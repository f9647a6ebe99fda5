"""
Dashboard Service Module
Aggregates a user's progress, achievements and favorites into dashboard statistics
"""
import logging
import math
from typing import Any, Dict, List

import pandas as pd

from .achievement_service import AchievementService
from .course_service import CourseService
from .favorite_service import FavoriteService
from .progress_service import ProgressService
from ..models.progress import CourseProgress
from ..utils.logger import custom_logger

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class DashboardService:
    """
    Builds the learning dashboard from four independent reads.
    Any read that fails contributes an empty collection.
    """
    def __init__(self, supabase=None):
        self.progress_service = ProgressService(supabase)
        self.achievement_service = AchievementService(supabase)
        self.favorite_service = FavoriteService(supabase)
        self.course_service = CourseService(supabase)

    @staticmethod
    def progress_stats(progress: List[CourseProgress]) -> Dict[str, int]:
        """
        Completed count, in-progress count and the rounded mean percentage
        @param progress: course_progress rows of one user
        """
        if not progress:
            return {'completed_courses': 0, 'in_progress_courses': 0, 'total_progress': 0}

        data = pd.DataFrame([p.to_dict() for p in progress])
        completed = data['completed'].astype(bool)
        percentage = data['progress_percentage'].astype(float)
        return {
            'completed_courses': int(completed.sum()),
            'in_progress_courses': int(((~completed) & (percentage > 0)).sum()),
            'total_progress': _round_half_up(float(percentage.mean())),
        }

    @staticmethod
    def recent_progress(progress: List[CourseProgress], courses_by_id: Dict[int, Dict[str, Any]],
                        limit: int = RECENT_LIMIT) -> List[Dict[str, Any]]:
        """Most recently accessed progress rows joined with their course; orphans are skipped."""
        ordered = sorted(progress, key=lambda p: p.last_accessed or '', reverse=True)

        entries = []
        for item in ordered:
            course = courses_by_id.get(item.course_id)
            if course is None:
                continue
            entries.append({'progress': item.to_dict(), 'course': course})
            if len(entries) >= limit:
                break
        return entries

    @custom_logger.log_function_call
    def get_dashboard(self, user_id: str) -> Dict[str, Any]:
        progress = self.progress_service.get_user_progress(user_id)
        achievements = self.achievement_service.get_user_achievements(user_id)
        favorites = self.favorite_service.get_user_favorites(user_id)
        courses = self.course_service.get_courses()

        courses_by_id = {course.id: course.to_dict() for course in courses}

        stats = self.progress_stats(progress)
        stats.update({
            'favorites_count': len(favorites),
            'achievements_count': len(achievements),
        })

        return {
            'user_id': user_id,
            'stats': stats,
            'current_progress': self.recent_progress(progress, courses_by_id),
            'recent_achievements': [a.to_dict() for a in achievements[:RECENT_LIMIT]],
            'favorite_courses': [
                courses_by_id[course_id] for course_id in favorites if course_id in courses_by_id
            ],
        }
