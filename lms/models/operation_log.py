"""Operation log model"""
from lms.extensions import db
from lms.utils.helpers import utcnow, isoformat


class OperationLog(db.Model):
    """Audit trail of API operations"""
    __tablename__ = 'operation_log'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'), nullable=True)  # anonymous for failed logins
    username = db.Column(db.String(255))  # denormalized for querying
    user_role = db.Column(db.String(20))

    operation_type = db.Column(db.String(50), nullable=False)  # login, create, update, delete, submit, grade
    operation_desc = db.Column(db.String(500))

    ip_address = db.Column(db.String(50))
    user_agent = db.Column(db.String(500))
    request_method = db.Column(db.String(10))
    request_path = db.Column(db.String(500))

    result = db.Column(db.String(20))  # success, failed
    error_msg = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            '_id': self.id,
            'user': self.user_id,
            'username': self.username,
            'user_role': self.user_role,
            'operation_type': self.operation_type,
            'operation_desc': self.operation_desc,
            'ip_address': self.ip_address,
            'request_method': self.request_method,
            'request_path': self.request_path,
            'result': self.result,
            'error_msg': self.error_msg,
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<OperationLog {self.id}: {self.username} - {self.operation_type}>'
