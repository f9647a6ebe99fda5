"""
Flask extension instances shared across the application
"""
from flask_caching import Cache
from flask_cors import CORS

cache = Cache()
cors = CORS()
