"""
Course Service Module
Handles data access for the courses table
"""
import logging
from typing import Any, Dict, List, Optional

from .base import SupabaseService
from ..models.course import Course, WRITABLE_FIELDS
from ..utils.logger import custom_logger
from ..utils.supabase_utils import first_row, log_supabase_error

logger = logging.getLogger(__name__)


class CourseService(SupabaseService):
    """
    Service class for course CRUD.
    Reads return an empty result and writes return False when the store fails.
    """
    table_name = 'courses'

    @staticmethod
    def _writable(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in fields.items() if k in WRITABLE_FIELDS}

    @custom_logger.log_function_call
    def get_courses(self) -> List[Course]:
        """
        Fetch every course, newest first
        @returns: List of courses, empty if the query failed
        """
        try:
            response = self.table()\
                .select('*')\
                .order('created_at', desc=True)\
                .execute()
            return [Course.from_record(row) for row in (response.data or [])]
        except Exception as e:
            log_supabase_error("Get courses", e)
            return []

    def get_course(self, course_id: int) -> Optional[Course]:
        """
        Fetch a single course
        @param course_id: Primary key of the course
        @returns: Course or None when missing or the query failed
        """
        try:
            response = self.table()\
                .select('*')\
                .eq('id', course_id)\
                .limit(1)\
                .execute()
            row = first_row(response.data)
            return Course.from_record(row) if row else None
        except Exception as e:
            log_supabase_error("Get course", e)
            return None

    @custom_logger.log_function_call
    def add_course(self, fields: Dict[str, Any]) -> bool:
        """
        Insert a course
        @param fields: Course columns without id and created_at
        @returns: True if the store accepted the insert
        """
        try:
            response = self.table().insert([self._writable(fields)]).execute()
            logger.info(f"Course added successfully: {response.data}")
            return True
        except Exception as e:
            log_supabase_error("Add course", e)
            return False

    @custom_logger.log_function_call
    def update_course(self, course_id: int, fields: Dict[str, Any]) -> bool:
        """
        Update a course
        @param course_id: Primary key of the course
        @param fields: Columns to overwrite
        @returns: True if the store accepted the update
        """
        try:
            response = self.table()\
                .update(self._writable(fields))\
                .eq('id', course_id)\
                .execute()
            logger.info(f"Course updated successfully: {response.data}")
            return True
        except Exception as e:
            log_supabase_error("Update course", e)
            return False

    @custom_logger.log_function_call
    def delete_course(self, course_id: int) -> bool:
        """
        Delete a course. Dependent progress, ratings and favorites are kept.
        A missing id still counts as success when the store reports none deleted.
        """
        try:
            response = self.table().delete().eq('id', course_id).execute()
            if not response.data:
                logger.warning(f"Delete matched no course with id {course_id}")
            return True
        except Exception as e:
            log_supabase_error("Delete course", e)
            return False
