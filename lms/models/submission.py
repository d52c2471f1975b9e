"""Submission models"""
from lms.extensions import db
from lms.utils.helpers import utcnow, isoformat


class Submission(db.Model):
    """A student's submission for an assignment"""
    id = db.Column(db.Integer, primary_key=True)
    assignment_id = db.Column(db.Integer, db.ForeignKey('assignment.id'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    content = db.Column(db.Text)
    link = db.Column(db.String(500))
    submitted_at = db.Column(db.DateTime, default=utcnow)
    grade = db.Column(db.Float)
    feedback = db.Column(db.Text)
    graded_at = db.Column(db.DateTime)
    graded_by = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'))

    # Relationships
    assignment = db.relationship('Assignment', backref=db.backref('submissions', cascade='all, delete-orphan'))
    student = db.relationship('User', foreign_keys=[student_id],
                              backref=db.backref('submissions_made', cascade='all, delete-orphan'))
    grader = db.relationship('User', foreign_keys=[graded_by])

    __table_args__ = (
        db.UniqueConstraint('assignment_id', 'student_id', name='unique_assignment_student_submission'),
    )

    @property
    def is_graded(self):
        return self.grade is not None

    def to_dict(self):
        return {
            '_id': self.id,
            'assignment': self.assignment_id,
            'assignment_title': self.assignment.title if self.assignment else None,
            'student': self.student.to_dict() if self.student else None,
            'content': self.content,
            'link': self.link,
            'submitted_at': isoformat(self.submitted_at),
            'grade': self.grade,
            'feedback': self.feedback,
            'graded_at': isoformat(self.graded_at),
            'graded_by': self.graded_by,
        }

    def __repr__(self):
        return f'<Submission student={self.student_id} assignment={self.assignment_id}>'
