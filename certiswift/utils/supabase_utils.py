"""
Utility module for the Supabase client.
Builds the client from configuration, checks the connection and logs remote errors.
"""
import logging
from typing import Any, Dict, List, Optional
from flask import current_app
from supabase import Client, create_client

# Initialize logging
logger = logging.getLogger(__name__)

EXTENSION_KEY = 'supabase'

# Hints for well-known PostgREST / Postgres error codes
ERROR_HINTS = {
    'PGRST116': 'Table not found or no rows returned, check that the table exists',
    '42501': 'Permission denied, check the row level security policies',
    '23505': 'Unique constraint violated',
}


def init_supabase(url: Optional[str], key: Optional[str]) -> Client:
    """
    Initialize Supabase client with proper error handling

    Returns:
        Client: Initialized Supabase client

    Raises:
        ValueError: If Supabase credentials are missing
    """
    if not url or not key:
        raise ValueError("Supabase URL or key is missing in configuration")

    logger.info(f"Initializing Supabase with URL: {url}")
    return create_client(url, key)


def get_supabase_client() -> Client:
    """
    Return the Supabase client bound to the current Flask application,
    creating it on first use.
    """
    client = current_app.extensions.get(EXTENSION_KEY)
    if client is None:
        client = init_supabase(
            current_app.config.get('SUPABASE_URL'),
            current_app.config.get('SUPABASE_KEY')
        )
        current_app.extensions[EXTENSION_KEY] = client
    return client


def log_supabase_error(context: str, error: Exception) -> None:
    """
    Log a failed Supabase call with whatever structured detail the client exposes.

    Args:
        context (str): What was being attempted, e.g. "Add course"
        error (Exception): The raised error
    """
    logger.error(f"{context} error: {str(error)}")

    code = getattr(error, 'code', None)
    for field in ('code', 'message', 'details', 'hint'):
        value = getattr(error, field, None)
        if value:
            logger.error(f"  {field}: {value}")

    if code in ERROR_HINTS:
        logger.error(f"  {ERROR_HINTS[code]}")


def test_connection(supabase_client: Client) -> bool:
    """
    Check that the courses table is reachable.

    Returns:
        bool: True if a count query against courses succeeds
    """
    try:
        response = supabase_client.table('courses')\
            .select('id', count='exact')\
            .limit(1)\
            .execute()
        logger.info(f"Database connection successful, courses count: {response.count}")
        return True
    except Exception as e:
        log_supabase_error("Connection test", e)
        return False


def first_row(rows: Optional[List[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    """Return the first row of a response payload, or None."""
    if not rows:
        return None
    return rows[0]
