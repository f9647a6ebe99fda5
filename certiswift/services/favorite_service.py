"""
Favorite Service Module
"""
import logging
from typing import List, Optional

from .base import SupabaseService
from ..models.favorite import UserFavorite
from ..utils.logger import custom_logger
from ..utils.supabase_utils import log_supabase_error

logger = logging.getLogger(__name__)


class FavoriteService(SupabaseService):
    """
    Service class for the user_favorites table.

    The toggle never reads before writing: it deletes the (user, course) pair
    and only inserts when nothing was deleted. The insert is an upsert that
    ignores duplicates on the unique (user_id, course_id) pair, so concurrent
    toggles cannot leave two rows behind.
    """
    table_name = 'user_favorites'
    conflict_target = 'user_id,course_id'

    @custom_logger.log_function_call
    def toggle_favorite(self, user_id: str, course_id: int) -> bool:
        """
        Flip favorite membership of a course for a user
        @returns: True if the store accepted both steps
        """
        try:
            removed = self.table()\
                .delete()\
                .eq('user_id', user_id)\
                .eq('course_id', course_id)\
                .execute()
        except Exception as e:
            log_supabase_error("Remove favorite", e)
            return False

        if removed.data:
            logger.info(f"Removed course {course_id} from favorites of {user_id}")
            return True

        try:
            self.table().upsert(
                {'user_id': user_id, 'course_id': course_id},
                on_conflict=self.conflict_target,
                ignore_duplicates=True
            ).execute()
            logger.info(f"Added course {course_id} to favorites of {user_id}")
            return True
        except Exception as e:
            log_supabase_error("Add favorite", e)
            return False

    @custom_logger.log_function_call
    def list_favorites(self, user_id: str) -> List[UserFavorite]:
        """Favorite rows of the user, oldest first, empty if the query failed."""
        try:
            response = self.table()\
                .select('*')\
                .eq('user_id', user_id)\
                .order('created_at')\
                .execute()
            return [UserFavorite.from_record(row) for row in (response.data or [])]
        except Exception as e:
            log_supabase_error("Get favorites", e)
            return []

    def get_user_favorites(self, user_id: str) -> List[int]:
        """Course ids favorited by the user."""
        return [favorite.course_id for favorite in self.list_favorites(user_id)]

    def is_favorite(self, user_id: str, course_id: int, favorites: Optional[List[int]] = None) -> bool:
        favorites = favorites if favorites is not None else self.get_user_favorites(user_id)
        return course_id in favorites
