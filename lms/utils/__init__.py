"""Utilities"""
from lms.utils.helpers import (
    utcnow, to_utc_naive, isoformat, parse_datetime,
    get_json_body, require_fields, single_line, get_page_args, paginate
)

__all__ = [
    'utcnow', 'to_utc_naive', 'isoformat', 'parse_datetime',
    'get_json_body', 'require_fields', 'single_line', 'get_page_args', 'paginate'
]
