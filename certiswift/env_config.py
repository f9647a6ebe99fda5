"""Environment-based configuration settings"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Environment settings
ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

# Public backend URL per environment
BACKEND_URLS = {
    'development': 'http://localhost:5000',
    'production': os.getenv('PRODUCTION_BACKEND_URL', 'https://api.certiswift.in')
}

BACKEND_URL = BACKEND_URLS.get(ENVIRONMENT, BACKEND_URLS['development'])

DEBUG = ENVIRONMENT == 'development'
