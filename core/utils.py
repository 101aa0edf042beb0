import uuid
from datetime import datetime, timezone

from flask import request

from .errors import MissingFields


def new_id() -> str:
    """Opaque string identifier for store rows."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(value):
    return value.isoformat() if value else None


def window_args(args, default_limit):
    """Read ``limit``/``offset`` query args, falling back on missing, invalid or zero values."""
    limit = args.get('limit', type=int) or default_limit
    offset = args.get('offset', type=int) or 0
    return max(limit, 1), max(offset, 0)


def request_json():
    """JSON object body of the current request; a missing or unparsable body reads as ``{}``."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MissingFields('Request body must be a JSON object')
    return data
