"""Tests for assignment CRUD."""
from datetime import timedelta

from lms.extensions import db
from lms.models import Notification, ReminderLog, Assignment
from lms.utils import utcnow


def test_create_assignment_notifies_students(app, client, teacher_id, student_id, make_course, auth_headers):
    course_id = make_course(teacher_id, [student_id])
    resp = client.post(f'/api/courses/{course_id}/assignments', headers=auth_headers(teacher_id), json={
        'title': 'Essay', 'description': 'Write it', 'deadline': '2030-05-01T12:00:00Z'
    })
    assert resp.status_code == 201
    data = resp.get_json()
    assert data['deadline'] == '2030-05-01T12:00:00Z'
    assert data['course'] == course_id
    assert data['is_overdue'] is False

    with app.app_context():
        notification = Notification.query.filter_by(receiver_id=student_id).one()
        assert notification.notification_type == 'assignment'
        assert notification.related_assignment_id == data['_id']


def test_deadline_with_offset_is_stored_as_utc(client, teacher_id, make_course, auth_headers):
    course_id = make_course(teacher_id)
    resp = client.post(f'/api/courses/{course_id}/assignments', headers=auth_headers(teacher_id), json={
        'title': 'Lab', 'deadline': '2030-05-01T20:00:00+08:00'
    })
    assert resp.get_json()['deadline'] == '2030-05-01T12:00:00Z'


def test_create_assignment_validation(client, teacher_id, make_course, auth_headers):
    course_id = make_course(teacher_id)
    headers = auth_headers(teacher_id)
    no_deadline = client.post(f'/api/courses/{course_id}/assignments', headers=headers, json={'title': 'X'})
    assert no_deadline.status_code == 400

    bad_deadline = client.post(f'/api/courses/{course_id}/assignments', headers=headers,
                               json={'title': 'X', 'deadline': 'next tuesday'})
    assert bad_deadline.status_code == 400

    split_title = client.post(f'/api/courses/{course_id}/assignments', headers=headers,
                              json={'title': 'Part 1\nPart 2', 'deadline': '2030-01-01T10:00:00Z'})
    assert split_title.status_code == 400
    assert split_title.get_json()['msg'] == 'Title must be a single line'


def test_create_assignment_for_unknown_course(client, teacher_id, auth_headers):
    resp = client.post('/api/courses/777/assignments', headers=auth_headers(teacher_id),
                       json={'title': 'X', 'deadline': '2030-01-01T00:00:00Z'})
    assert resp.status_code == 404


def test_other_teacher_cannot_create_assignment(client, make_user, teacher_id, make_course, auth_headers):
    course_id = make_course(teacher_id)
    intruder = make_user('teacher')
    resp = client.post(f'/api/courses/{course_id}/assignments', headers=auth_headers(intruder),
                       json={'title': 'X', 'deadline': '2030-01-01T00:00:00Z'})
    assert resp.status_code == 403


def test_enrolled_student_lists_assignments(client, teacher_id, student_id, make_user,
                                            make_course, make_assignment, auth_headers):
    course_id = make_course(teacher_id, [student_id])
    make_assignment(course_id, due_in=timedelta(days=2), title='Later')
    make_assignment(course_id, due_in=timedelta(days=1), title='Sooner')

    resp = client.get(f'/api/courses/{course_id}/assignments', headers=auth_headers(student_id))
    assert [a['title'] for a in resp.get_json()] == ['Sooner', 'Later']

    outsider = make_user('student')
    assert client.get(f'/api/courses/{course_id}/assignments',
                      headers=auth_headers(outsider)).status_code == 403


def test_upcoming_assignments_flag_submissions(client, teacher_id, student_id, make_course,
                                               make_assignment, make_submission, auth_headers):
    course_id = make_course(teacher_id, [student_id])
    done = make_assignment(course_id, due_in=timedelta(hours=1), title='Done')
    make_assignment(course_id, due_in=timedelta(hours=2), title='Open')
    make_assignment(course_id, due_in=timedelta(hours=-1), title='Past')
    make_submission(done, student_id)

    upcoming = client.get('/api/assignments/upcoming', headers=auth_headers(student_id)).get_json()
    assert [(a['title'], a['submitted']) for a in upcoming] == [('Done', True), ('Open', False)]


def test_update_assignment_deadline_resets_reminders(app, client, teacher_id, student_id, make_course,
                                                     make_assignment, auth_headers):
    course_id = make_course(teacher_id, [student_id])
    assignment_id = make_assignment(course_id)
    with app.app_context():
        db.session.add(ReminderLog(assignment_id=assignment_id, student_id=student_id))
        db.session.commit()

    new_deadline = (utcnow() + timedelta(days=3)).replace(microsecond=0)
    resp = client.put(f'/api/assignments/{assignment_id}', headers=auth_headers(teacher_id),
                      json={'deadline': new_deadline.isoformat() + 'Z', 'title': 'Homework 1b'})
    assert resp.status_code == 200
    assert resp.get_json()['title'] == 'Homework 1b'

    with app.app_context():
        assert ReminderLog.query.count() == 0
        assert db.session.get(Assignment, assignment_id).deadline == new_deadline


def test_student_cannot_update_or_delete(client, teacher_id, student_id, make_course,
                                        make_assignment, auth_headers):
    course_id = make_course(teacher_id, [student_id])
    assignment_id = make_assignment(course_id)
    headers = auth_headers(student_id)
    assert client.put(f'/api/assignments/{assignment_id}', headers=headers, json={'title': 'x'}).status_code == 403
    assert client.delete(f'/api/assignments/{assignment_id}', headers=headers).status_code == 403


def test_delete_assignment(app, client, teacher_id, make_course, make_assignment, auth_headers):
    course_id = make_course(teacher_id)
    assignment_id = make_assignment(course_id)
    resp = client.delete(f'/api/assignments/{assignment_id}', headers=auth_headers(teacher_id))
    assert resp.status_code == 200
    with app.app_context():
        assert db.session.get(Assignment, assignment_id) is None
