"""Rate limiting configuration (avoids circular imports)."""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

# Disable rate limiting in tests by setting ORG_GRAPH_NO_RATE_LIMIT=true
_enabled = os.environ.get("ORG_GRAPH_NO_RATE_LIMIT", "").lower() != "true"

limiter = Limiter(key_func=get_remote_address, enabled=_enabled)
