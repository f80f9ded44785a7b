# messagely/core/rate_limit.py

from slowapi import Limiter
from slowapi.util import get_remote_address

from messagely.config import LOGIN_RATE_LIMIT

# Initialize limiter
limiter = Limiter(key_func=get_remote_address)

# Rate limit constants
LOGIN_LIMIT = LOGIN_RATE_LIMIT
