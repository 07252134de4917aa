"""Rate limiting for the registration and login endpoints."""

from slowapi import Limiter
from slowapi.util import get_remote_address

REGISTER_RATE_LIMIT = "5/minute"
LOG_IN_RATE_LIMIT = "10/minute"

# Counted per client address
limiter = Limiter(key_func=get_remote_address)
