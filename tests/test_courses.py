"""Tests for course CRUD and enrollment."""
from lms.extensions import db
from lms.models import Course, UserRole


def test_teacher_creates_course_and_owns_it(client, teacher_id, auth_headers):
    resp = client.post('/api/courses', headers=auth_headers(teacher_id),
                       json={'title': 'Databases', 'description': 'SQL and more'})
    assert resp.status_code == 201
    course = resp.get_json()
    assert course['title'] == 'Databases'
    assert course['teacher']['_id'] == teacher_id


def test_student_cannot_create_course(client, student_id, auth_headers):
    resp = client.post('/api/courses', headers=auth_headers(student_id), json={'title': 'Nope'})
    assert resp.status_code == 403


def test_admin_assigns_teacher(client, admin_id, teacher_id, student_id, auth_headers):
    headers = auth_headers(admin_id)
    resp = client.post('/api/courses', headers=headers, json={'title': 'Networks', 'teacher_id': teacher_id})
    assert resp.get_json()['teacher']['_id'] == teacher_id

    bad = client.post('/api/courses', headers=headers, json={'title': 'X', 'teacher_id': student_id})
    assert bad.status_code == 400


def test_course_listing_visible_to_any_user(client, teacher_id, student_id, make_course, auth_headers):
    make_course(teacher_id, title='Compilers')
    resp = client.get('/api/courses', headers=auth_headers(student_id))
    assert resp.status_code == 200
    assert [c['title'] for c in resp.get_json()] == ['Compilers']


def test_inactive_course_hidden_from_non_admins(app, client, admin_id, teacher_id, student_id,
                                                 make_course, auth_headers):
    course_id = make_course(teacher_id)
    with app.app_context():
        db.session.get(Course, course_id).is_active = False
        db.session.commit()

    assert client.get('/api/courses', headers=auth_headers(student_id)).get_json() == []
    assert len(client.get('/api/courses', headers=auth_headers(admin_id)).get_json()) == 1
    assert client.get(f'/api/courses/{course_id}', headers=auth_headers(student_id)).status_code == 404


def test_only_owner_updates_course(client, make_user, teacher_id, make_course, auth_headers):
    other_teacher = make_user(UserRole.TEACHER)
    course_id = make_course(teacher_id)

    denied = client.put(f'/api/courses/{course_id}', headers=auth_headers(other_teacher), json={'title': 'Mine'})
    assert denied.status_code == 403

    resp = client.put(f'/api/courses/{course_id}', headers=auth_headers(teacher_id), json={'title': 'Renamed'})
    assert resp.status_code == 200
    assert resp.get_json()['title'] == 'Renamed'


def test_teacher_cannot_reassign_course(client, make_user, teacher_id, make_course, auth_headers):
    course_id = make_course(teacher_id)
    other_teacher = make_user(UserRole.TEACHER)
    resp = client.put(f'/api/courses/{course_id}', headers=auth_headers(teacher_id),
                      json={'teacher_id': other_teacher})
    assert resp.status_code == 403


def test_enroll_and_unenroll_students(client, teacher_id, make_user, make_course, auth_headers):
    course_id = make_course(teacher_id)
    s1 = make_user(UserRole.STUDENT)
    s2 = make_user(UserRole.STUDENT)
    headers = auth_headers(teacher_id)

    resp = client.post(f'/api/courses/{course_id}/students', headers=headers, json={'student_ids': [s1, s2, s1]})
    assert resp.status_code == 200
    assert resp.get_json()['added'] == 2

    students = client.get(f'/api/courses/{course_id}/students', headers=headers).get_json()
    assert sorted(s['_id'] for s in students) == sorted([s1, s2])

    resp = client.delete(f'/api/courses/{course_id}/students/{s1}', headers=headers)
    assert resp.status_code == 200
    assert [s['_id'] for s in resp.get_json()['students']] == [s2]


def test_enroll_unknown_or_non_student(client, teacher_id, make_course, auth_headers):
    course_id = make_course(teacher_id)
    headers = auth_headers(teacher_id)
    missing = client.post(f'/api/courses/{course_id}/students', headers=headers, json={'student_ids': [424242]})
    assert missing.status_code == 404

    not_student = client.post(f'/api/courses/{course_id}/students', headers=headers,
                              json={'student_ids': [teacher_id]})
    assert not_student.status_code == 400


def test_student_self_enrolls_once(client, teacher_id, student_id, make_course, auth_headers):
    course_id = make_course(teacher_id)
    headers = auth_headers(student_id)
    assert client.post(f'/api/courses/{course_id}/enroll', headers=headers).status_code == 200
    assert client.post(f'/api/courses/{course_id}/enroll', headers=headers).status_code == 400


def test_delete_course_cascades_assignments(app, client, teacher_id, make_course, make_assignment, auth_headers):
    course_id = make_course(teacher_id)
    make_assignment(course_id)

    resp = client.delete(f'/api/courses/{course_id}', headers=auth_headers(teacher_id))
    assert resp.status_code == 200
    with app.app_context():
        from lms.models import Assignment
        assert Assignment.query.count() == 0


def test_unknown_course(client, teacher_id, auth_headers):
    resp = client.get('/api/courses/999', headers=auth_headers(teacher_id))
    assert resp.status_code == 404
    assert resp.get_json()['msg'] == 'Course not found'
