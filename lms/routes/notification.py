"""Notification routes"""
from flask import Blueprint, jsonify, request
from flask_login import current_user

from lms.errors import Forbidden, get_or_404
from lms.extensions import db
from lms.models import Notification
from lms.services import NotificationService
from lms.utils import paginate
from lms.utils.decorators import require_login

bp = Blueprint('notification', __name__, url_prefix='/api/notifications')


def get_own_notification(notification_id):
    notification = get_or_404(Notification, notification_id, 'Notification not found')
    if notification.receiver_id != current_user.id:
        raise Forbidden('Not allowed')
    return notification


@bp.route('')
@require_login
def list_notifications():
    """Current user's notifications, newest first"""
    query = Notification.query.filter_by(receiver_id=current_user.id)
    if request.args.get('unread', type=int):
        query = query.filter_by(is_read=False)
    query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
    return jsonify(paginate(query, 'notifications'))


@bp.route('/count')
@require_login
def unread_count():
    return jsonify({'unread_count': NotificationService.get_unread_count(current_user.id)})


@bp.route('/<int:notification_id>/read', methods=['POST'])
@require_login
def mark_read(notification_id):
    notification = get_own_notification(notification_id)
    NotificationService.mark_as_read(notification)
    return jsonify({
        'success': True,
        'unread_count': NotificationService.get_unread_count(current_user.id)
    })


@bp.route('/read-all', methods=['POST'])
@require_login
def mark_all_read():
    updated = NotificationService.mark_all_as_read(current_user.id)
    return jsonify({'success': True, 'updated': updated, 'unread_count': 0})


@bp.route('/<int:notification_id>', methods=['DELETE'])
@require_login
def delete_notification(notification_id):
    notification = get_own_notification(notification_id)
    db.session.delete(notification)
    db.session.commit()
    return jsonify({'msg': 'Notification deleted'})
