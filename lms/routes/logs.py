"""Operation log routes"""
from datetime import timedelta

from flask import Blueprint, jsonify, request

from lms.models import UserRole
from lms.services import LogService
from lms.utils import paginate, parse_datetime
from lms.utils.decorators import require_role

bp = Blueprint('logs', __name__, url_prefix='/api/admin/logs')


@bp.route('')
@require_role(UserRole.ADMIN)
def index():
    """Operation log listing - admins only"""
    user_id = request.args.get('user_id', type=int)
    operation_type = request.args.get('operation_type')

    start_date = None
    end_date = None
    if request.args.get('start_date'):
        start_date = parse_datetime(request.args['start_date'], field='start_date')
    if request.args.get('end_date'):
        end_date = parse_datetime(request.args['end_date'], field='end_date')
        if 'T' not in request.args['end_date']:
            end_date = end_date + timedelta(days=1)  # bare date includes the whole day

    query = LogService.get_logs(
        user_id=user_id,
        operation_type=operation_type,
        start_date=start_date,
        end_date=end_date
    )
    return jsonify(paginate(query, 'logs'))
