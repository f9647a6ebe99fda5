"""
Achievement Service Module
"""
import logging
from typing import List

from .base import SupabaseService
from ..models.achievement import Achievement
from ..utils.logger import custom_logger
from ..utils.supabase_utils import log_supabase_error

logger = logging.getLogger(__name__)


class AchievementService(SupabaseService):
    table_name = 'achievements'

    @custom_logger.log_function_call
    def award_achievement(self, user_id: str, badge_type: str, badge_name: str, description: str) -> bool:
        try:
            self.table().insert({
                'user_id': user_id,
                'badge_type': badge_type,
                'badge_name': badge_name,
                'description': description,
            }).execute()
            return True
        except Exception as e:
            log_supabase_error("Award achievement", e)
            return False

    @custom_logger.log_function_call
    def get_user_achievements(self, user_id: str) -> List[Achievement]:
        """Achievements of a user, most recent first."""
        try:
            response = self.table()\
                .select('*')\
                .eq('user_id', user_id)\
                .order('earned_at', desc=True)\
                .execute()
            return [Achievement.from_record(row) for row in (response.data or [])]
        except Exception as e:
            log_supabase_error("Get achievements", e)
            return []
