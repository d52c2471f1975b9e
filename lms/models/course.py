"""Course models"""
from lms.extensions import db
from lms.utils.helpers import utcnow, isoformat

# Course-student enrollment table
course_student = db.Table('course_student',
    db.Column('course_id', db.Integer, db.ForeignKey('course.id'), primary_key=True),
    db.Column('student_id', db.Integer, db.ForeignKey('user.id'), primary_key=True)
)


class Course(db.Model):
    """Course"""
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    teacher_id = db.Column(db.Integer, db.ForeignKey('user.id'))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    teacher = db.relationship('User', backref='teaching_courses', foreign_keys=[teacher_id])
    students = db.relationship('User', secondary=course_student, backref='courses')

    def is_managed_by(self, user):
        """Admins manage every course, teachers only their own"""
        if user.is_admin:
            return True
        return user.is_teacher and self.teacher_id == user.id

    def has_student(self, user):
        return any(s.id == user.id for s in self.students)

    def to_dict(self, include_students=False):
        data = {
            '_id': self.id,
            'title': self.title,
            'description': self.description,
            'teacher': self.teacher.to_dict() if self.teacher else None,
            'student_count': len(self.students),
            'is_active': self.is_active,
            'created_at': isoformat(self.created_at),
        }
        if include_students:
            data['students'] = [s.to_dict() for s in self.students]
        return data

    def __repr__(self):
        return f'<Course {self.title}>'
