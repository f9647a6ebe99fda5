"""
Configuration settings for the application
"""
import os
from dotenv import load_dotenv
from .env_config import BACKEND_URL, ENVIRONMENT, DEBUG

# Load environment variables
load_dotenv()

# Module-level configuration variables
SUPABASE_URL = os.getenv('SUPABASE_URL')
SUPABASE_KEY = os.getenv('SUPABASE_KEY')
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')

# Support intake settings
SUPPORT_WEBHOOK_URL = os.getenv('SUPPORT_WEBHOOK_URL')
SUPPORT_RATE_LIMIT_SECONDS = int(os.getenv('SUPPORT_RATE_LIMIT_SECONDS', '60'))
DNS_RESOLVER_URL = os.getenv('DNS_RESOLVER_URL', 'https://dns.google/resolve')
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '10'))

# Progress tracker settings
DEFAULT_TOTAL_MODULES = int(os.getenv('DEFAULT_TOTAL_MODULES', '10'))

# Number of reverse proxies in front of the app whose X-Forwarded-For is trusted
PROXY_FIX_X_FOR = int(os.getenv('PROXY_FIX_X_FOR', '0'))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv('CORS_ORIGINS', 'https://certiswift.in,http://localhost:3000').split(',')
    if origin.strip()
]


class Config:
    """
    Configuration class for the application.
    Contains all necessary settings and environment variables.
    """

    # Supabase connection
    SUPABASE_URL = SUPABASE_URL
    SUPABASE_KEY = SUPABASE_KEY

    # Flask session signing for the admin area
    SECRET_KEY = SECRET_KEY

    # Environment settings
    ENVIRONMENT = ENVIRONMENT
    DEBUG = DEBUG
    API_BASE_URL = BACKEND_URL
    CORS_ORIGINS = CORS_ORIGINS

    # Flask-Caching backend, used for support rate limiting
    CACHE_TYPE = os.getenv('CACHE_TYPE', 'SimpleCache')
    CACHE_DEFAULT_TIMEOUT = 300

    # Support intake
    SUPPORT_WEBHOOK_URL = SUPPORT_WEBHOOK_URL
    SUPPORT_RATE_LIMIT_SECONDS = SUPPORT_RATE_LIMIT_SECONDS
    DNS_RESOLVER_URL = DNS_RESOLVER_URL
    REQUEST_TIMEOUT = REQUEST_TIMEOUT

    # Progress tracker
    DEFAULT_TOTAL_MODULES = DEFAULT_TOTAL_MODULES

    # Reverse proxy hops, 0 when clients connect directly
    PROXY_FIX_X_FOR = PROXY_FIX_X_FOR

    @classmethod
    def validate(cls, settings=None) -> None:
        """
        Validate that all required configuration values are set.
        Raises ValueError if any required value is missing.

        @param settings: Optional mapping checked instead of the class attributes
        """
        settings = settings if settings is not None else vars(cls)
        if not settings.get('SUPABASE_URL'):
            raise ValueError("SUPABASE_URL environment variable is not set")
        if not settings.get('SUPABASE_KEY'):
            raise ValueError("SUPABASE_KEY environment variable is not set")
