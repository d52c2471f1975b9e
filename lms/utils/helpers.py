"""Helper functions"""
from datetime import datetime, timezone

from flask import current_app, request

from lms.errors import BadRequest


def utcnow():
    """Current time as a naive UTC datetime (the storage convention)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(dt):
    """Convert an aware datetime to naive UTC; naive values are assumed UTC"""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def isoformat(dt):
    """Serialize a stored UTC datetime as ISO 8601 with a Z suffix"""
    if dt is None:
        return None
    return to_utc_naive(dt).isoformat(timespec='seconds') + 'Z'


def parse_datetime(value, field='deadline'):
    """Parse an ISO 8601 string into naive UTC"""
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if not value or not isinstance(value, str):
        raise BadRequest(f'{field} is required')
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise BadRequest(f'Invalid {field} format, expected ISO 8601')
    return to_utc_naive(parsed)


def get_json_body():
    """Request JSON body as a dict"""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest('Request body must be a JSON object')
    return data


def require_fields(data, *fields):
    """Raise BadRequest when any field is missing or blank"""
    missing = [f for f in fields if data.get(f) in (None, '')]
    if missing:
        raise BadRequest(f'Missing required fields: {", ".join(missing)}')


def single_line(value, field='title'):
    """Strip a text field, rejecting blanks and line breaks"""
    text = str(value or '').strip()
    if not text:
        raise BadRequest(f'{field.capitalize()} cannot be empty')
    if '\r' in text or '\n' in text:
        raise BadRequest(f'{field.capitalize()} must be a single line')
    return text


def get_page_args():
    """Read ``page`` and ``limit`` query parameters, clamped to sane bounds"""
    page = request.args.get('page', 1, type=int) or 1
    default_limit = current_app.config['DEFAULT_PER_PAGE']
    limit = request.args.get('limit', default_limit, type=int) or default_limit
    page = max(page, 1)
    limit = min(max(limit, 1), current_app.config['MAX_PER_PAGE'])
    return page, limit


def paginate(query, key, serializer=None):
    """Paginate a query into ``{key: [...], total, page, limit, pages}``"""
    page, limit = get_page_args()
    pagination = query.paginate(page=page, per_page=limit, error_out=False)
    serializer = serializer or (lambda obj: obj.to_dict())
    return {
        key: [serializer(item) for item in pagination.items],
        'total': pagination.total,
        'page': page,
        'limit': limit,
        'pages': pagination.pages,
    }
