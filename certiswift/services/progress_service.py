"""
Progress Service Module
Persists per-course progress and applies the tracker actions
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from .base import SupabaseService
from ..models.progress import CourseProgress, ProgressTracker, clamp_percentage, is_completed
from ..utils.logger import custom_logger
from ..utils.supabase_utils import log_supabase_error

logger = logging.getLogger(__name__)


class ProgressService(SupabaseService):
    """
    Service class for the course_progress table.
    One row per (user_id, course_id), written with an upsert on that pair.
    """
    table_name = 'course_progress'
    conflict_target = 'user_id,course_id'

    @custom_logger.log_function_call
    def update_course_progress(self, user_id: str, course_id: int, progress_percentage: float) -> bool:
        """
        Upsert the progress row for a user and course
        @param progress_percentage: Clamped into [0, 100]; completed is derived from it
        @returns: True if the store accepted the upsert
        """
        percentage = clamp_percentage(progress_percentage)
        try:
            self.table().upsert({
                'user_id': user_id,
                'course_id': course_id,
                'progress_percentage': percentage,
                'completed': is_completed(percentage),
                'last_accessed': datetime.now(timezone.utc).isoformat(),
            }, on_conflict=self.conflict_target).execute()
            return True
        except Exception as e:
            log_supabase_error("Update progress", e)
            return False

    @custom_logger.log_function_call
    def get_user_progress(self, user_id: str) -> List[CourseProgress]:
        """Every progress row of a user, empty if the query failed."""
        try:
            response = self.table()\
                .select('*')\
                .eq('user_id', user_id)\
                .execute()
            return [CourseProgress.from_record(row) for row in (response.data or [])]
        except Exception as e:
            log_supabase_error("Get progress", e)
            return []

    def get_course_progress(self, user_id: str, course_id: int) -> Optional[CourseProgress]:
        """The user's row for one course, found in the user's progress list."""
        for progress in self.get_user_progress(user_id):
            if progress.course_id == course_id:
                return progress
        return None

    def get_tracker(self, user_id: str, course_id: int, total_modules: int = 10) -> ProgressTracker:
        return ProgressTracker.from_progress(
            self.get_course_progress(user_id, course_id),
            total_modules
        )

    def set_progress(self, user_id: str, course_id: int, percentage: float,
                     total_modules: int = 10) -> Optional[ProgressTracker]:
        """
        Set the percentage directly
        @returns: Tracker re-read from the store, or None if the write failed
        """
        tracker = ProgressTracker(total_modules=total_modules)
        tracker.set(percentage)
        return self._save(user_id, course_id, tracker)

    def complete_module(self, user_id: str, course_id: int, total_modules: int = 10) -> Optional[ProgressTracker]:
        """Advance by one module (100 / total_modules), clamped at 100."""
        tracker = self.get_tracker(user_id, course_id, total_modules)
        tracker.complete_module()
        return self._save(user_id, course_id, tracker)

    def add_progress(self, user_id: str, course_id: int, increment: float,
                     total_modules: int = 10) -> Optional[ProgressTracker]:
        """Advance by a flat amount, clamped at 100."""
        tracker = self.get_tracker(user_id, course_id, total_modules)
        tracker.add(increment)
        return self._save(user_id, course_id, tracker)

    def _save(self, user_id: str, course_id: int, tracker: ProgressTracker) -> Optional[ProgressTracker]:
        if not self.update_course_progress(user_id, course_id, tracker.percentage):
            return None
        return self.get_tracker(user_id, course_id, tracker.total_modules)
