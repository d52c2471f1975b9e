"""Operation log service"""
import logging

from flask import request, has_request_context
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from lms.extensions import db
from lms.models.operation_log import OperationLog

logger = logging.getLogger(__name__)


class LogService:
    """Operation log service"""

    @staticmethod
    def log_operation(operation_type, operation_desc, result='success', error_msg=None, user=None):
        """
        Record an operation log row

        Args:
            operation_type: login, create, update, delete, submit, grade...
            operation_desc: description
            result: success or failed
            error_msg: error message for failed operations
            user: acting user; defaults to the authenticated user
        """
        try:
            ip_address = user_agent = request_method = request_path = None
            if has_request_context():
                ip_address = request.remote_addr
                user_agent = request.headers.get('User-Agent', '')[:500]
                request_method = request.method
                request_path = request.path

            if user is None and has_request_context() and current_user.is_authenticated:
                user = current_user

            log = OperationLog(
                user_id=user.id if user else None,
                username=user.email if user else 'anonymous',
                user_role=user.role if user else 'guest',
                operation_type=operation_type,
                operation_desc=operation_desc[:500] if operation_desc else None,
                ip_address=ip_address,
                user_agent=user_agent,
                request_method=request_method,
                request_path=request_path,
                result=result,
                error_msg=error_msg,
            )
            db.session.add(log)
            db.session.commit()
        except SQLAlchemyError as e:
            # A failed audit write must not break the request
            logger.error(f'Failed to record operation log: {e}')
            db.session.rollback()

    @staticmethod
    def get_logs(user_id=None, operation_type=None, start_date=None, end_date=None):
        """Filtered log query, newest first"""
        query = OperationLog.query

        if user_id:
            query = query.filter_by(user_id=user_id)

        if operation_type:
            query = query.filter_by(operation_type=operation_type)

        if start_date:
            query = query.filter(OperationLog.created_at >= start_date)

        if end_date:
            query = query.filter(OperationLog.created_at <= end_date)

        return query.order_by(OperationLog.created_at.desc(), OperationLog.id.desc())
