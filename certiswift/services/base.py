"""
Base class for services that talk to Supabase
"""
import logging
from typing import Optional
from supabase import Client

from ..utils.supabase_utils import get_supabase_client

logger = logging.getLogger(__name__)


class SupabaseService:
    """
    Holds the Supabase client used by a service.

    When no client is given the one bound to the current Flask application
    is resolved on every access, so a module-level service instance can be
    shared across requests and test applications.
    """
    table_name: str = ''

    def __init__(self, supabase: Optional[Client] = None):
        self._supabase = supabase

    @property
    def supabase(self) -> Client:
        return self._supabase if self._supabase is not None else get_supabase_client()

    def table(self, name: Optional[str] = None):
        return self.supabase.table(name or self.table_name)
