"""Assignment models"""
from lms.extensions import db
from lms.utils.helpers import utcnow, isoformat


class Assignment(db.Model):
    """Assignment belonging to a course"""
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    deadline = db.Column(db.DateTime, nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    course = db.relationship('Course', backref=db.backref('assignments', cascade='all, delete-orphan'))
    creator = db.relationship('User', foreign_keys=[created_by])

    def is_overdue(self, now=None):
        """Whether the deadline has passed"""
        return (now or utcnow()) > self.deadline

    def submission_for(self, student_id):
        from lms.models.submission import Submission
        return Submission.query.filter_by(assignment_id=self.id, student_id=student_id).first()

    def has_submitted(self, student_id):
        return any(s.student_id == student_id for s in self.submissions)

    def to_dict(self):
        return {
            '_id': self.id,
            'title': self.title,
            'description': self.description,
            'deadline': isoformat(self.deadline),
            'course': self.course_id,
            'course_title': self.course.title if self.course else None,
            'created_by': self.created_by,
            'is_active': self.is_active,
            'is_overdue': self.is_overdue(),
            'submission_count': len(self.submissions),
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Assignment {self.title}>'
