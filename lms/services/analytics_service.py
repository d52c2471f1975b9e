"""Dashboard analytics and exports"""
from io import StringIO

import pandas as pd
from sqlalchemy import func

from lms.extensions import db
from lms.models import User, UserRole, Course, Assignment, Submission


class AnalyticsService:
    """Aggregate statistics for the admin dashboard"""

    @staticmethod
    def get_overview():
        """Totals across users, courses, assignments and submissions"""
        role_counts = dict(
            db.session.query(User.role, func.count(User.id)).group_by(User.role).all()
        )
        grade_stats = db.session.query(
            func.count(Submission.grade),
            func.avg(Submission.grade)
        ).filter(Submission.grade.isnot(None)).first()
        graded_count, average_grade = grade_stats if grade_stats else (0, None)

        return {
            'users': {
                'total': sum(role_counts.values()),
                'students': role_counts.get(UserRole.STUDENT, 0),
                'teachers': role_counts.get(UserRole.TEACHER, 0),
                'admins': role_counts.get(UserRole.ADMIN, 0),
            },
            'courses': Course.query.filter_by(is_active=True).count(),
            'assignments': Assignment.query.count(),
            'submissions': Submission.query.count(),
            'graded_submissions': graded_count or 0,
            'average_grade': round(average_grade, 2) if average_grade is not None else None,
        }

    @staticmethod
    def submission_heatmap(course):
        """
        Student x day submission counts for a course

        Rows are every enrolled student (by email), columns the days that saw
        at least one submission, cells the number of submissions that day.
        """
        rows = db.session.query(User.email, Submission.submitted_at).join(
            Submission, Submission.student_id == User.id
        ).join(
            Assignment, Submission.assignment_id == Assignment.id
        ).filter(Assignment.course_id == course.id).all()

        students = sorted(s.email for s in course.students)
        df = pd.DataFrame(rows, columns=['student', 'submitted_at'])
        if df.empty:
            return pd.DataFrame(index=pd.Index(students, name='student'))

        df['day'] = pd.to_datetime(df['submitted_at']).dt.strftime('%Y-%m-%d')
        heatmap = df.pivot_table(
            index='student', columns='day', values='submitted_at',
            aggfunc='count', fill_value=0
        )
        heatmap = heatmap.reindex(sorted(set(students) | set(heatmap.index)), fill_value=0)
        heatmap.index.name = 'student'
        heatmap.columns.name = None
        return heatmap.astype(int)

    @staticmethod
    def submission_heatmap_csv(course):
        buffer = StringIO()
        AnalyticsService.submission_heatmap(course).to_csv(buffer)
        return buffer.getvalue()
