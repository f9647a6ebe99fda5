"""
Rating Service Module
"""
import logging
from typing import Any, Dict, List, Optional

from .base import SupabaseService
from ..models.rating import CourseRating, average_rating
from ..utils.logger import custom_logger
from ..utils.supabase_utils import log_supabase_error

logger = logging.getLogger(__name__)


class RatingService(SupabaseService):
    table_name = 'course_ratings'

    @custom_logger.log_function_call
    def add_course_rating(self, course_id: int, user_name: str, rating: int,
                          review: Optional[str] = None) -> bool:
        try:
            self.table().insert({
                'course_id': course_id,
                'user_name': user_name,
                'rating': rating,
                'review': review,
            }).execute()
            return True
        except Exception as e:
            log_supabase_error("Add rating", e)
            return False

    @custom_logger.log_function_call
    def get_course_ratings(self, course_id: int) -> List[CourseRating]:
        try:
            response = self.table()\
                .select('*')\
                .eq('course_id', course_id)\
                .order('created_at', desc=True)\
                .execute()
            return [CourseRating.from_record(row) for row in (response.data or [])]
        except Exception as e:
            log_supabase_error("Get ratings", e)
            return []

    def get_rating_summary(self, course_id: int) -> Dict[str, Any]:
        """Ratings of a course, newest first, with their mean and count."""
        ratings = self.get_course_ratings(course_id)
        return {
            'course_id': course_id,
            'ratings': [rating.to_dict() for rating in ratings],
            'average_rating': average_rating(ratings),
            'count': len(ratings),
        }
