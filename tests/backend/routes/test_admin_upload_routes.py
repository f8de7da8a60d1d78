import pytest

from backend.models.exam_result import ExamResult
from backend.models.fingerprint import Fingerprint


def test_enroll_fingerprint(client, admin_headers, make_user, db_session) -> None:
    student = make_user('student@x.com')

    response = client.post(
        '/fingerprint/enroll',
        json={'userId': student.id, 'data': 'aGFzaGVkLXRlbXBsYXRl'},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()['message'] == 'Fingerprint enrolled'
    assert db_session.query(Fingerprint).count() == 1


def test_enroll_fingerprint_with_empty_data_is_rejected(client, admin_headers, make_user, db_session) -> None:
    student = make_user('student@x.com')

    response = client.post('/fingerprint/enroll', json={'userId': student.id, 'data': ''}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {'detail': 'Missing data'}
    assert db_session.query(Fingerprint).count() == 0


def test_enroll_fingerprint_requires_admin(client, make_user, token_for) -> None:
    student = make_user('student@x.com')

    response = client.post(
        '/fingerprint/enroll',
        json={'userId': student.id, 'data': 'x'},
        headers={'Authorization': f'Bearer {token_for(student)}'},
    )

    assert response.status_code == 403


def test_upload_exam_result_returns_id(client, admin_headers, make_user, db_session) -> None:
    student = make_user('student@x.com')

    response = client.post(
        '/results/upload',
        json={'userId': student.id, 'examName': 'Finals', 'year': 2024, 'scores': {'math': 90, 'physics': 85}},
        headers=admin_headers,
    )

    assert response.status_code == 201
    stored = db_session.get(ExamResult, response.json()['id'])
    assert stored.exam_name == 'Finals'
    assert stored.scores == {'math': 90, 'physics': 85}


def test_upload_exam_result_rejects_missing_fields(client, admin_headers, make_user) -> None:
    student = make_user('student@x.com')

    response = client.post(
        '/results/upload',
        json={'userId': student.id, 'examName': 'Finals'},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json() == {'detail': 'Missing fields'}


def test_upload_exam_result_requires_token(client) -> None:
    response = client.post('/results/upload', json={})

    assert response.status_code == 401


@pytest.mark.parametrize('scores', [{'math': True}, {'math': '90'}, ['math', 90]])
def test_upload_exam_result_rejects_non_numeric_scores(client, admin_headers, make_user, db_session, scores) -> None:
    student = make_user('student@x.com')

    response = client.post(
        '/results/upload',
        json={'userId': student.id, 'examName': 'Finals', 'year': 2024, 'scores': scores},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert db_session.query(ExamResult).count() == 0


def test_upload_exam_result_rejects_year_given_as_string(client, admin_headers, make_user, db_session) -> None:
    student = make_user('student@x.com')

    response = client.post(
        '/results/upload',
        json={'userId': student.id, 'examName': 'Finals', 'year': '2024', 'scores': {'math': 90}},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert db_session.query(ExamResult).count() == 0
