"""Course endpoint tests."""

from datetime import datetime

import pytest

from devfolio.models.course import Course

COURSE = {
    "title": "Intro to Web APIs",
    "description": "Build and deploy HTTP APIs from scratch, covering routing, auth and testing.",
    "category": "Web Development",
    "level": "Beginner",
    "duration": 12,
    "isPublished": True,
}

REVIEW = {"rating": 4, "comment": "Clear explanations throughout"}


def create_course(client, headers, **overrides):
    response = client.post("/api/courses", headers=headers, json={**COURSE, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def course(client, auth_headers):
    return create_course(client, auth_headers)


def test_create_course(client, auth_headers, course):
    assert course["instructorId"] == auth_headers.user_id
    assert course["rating"] == {"average": 0, "count": 0}
    assert course["enrolledStudents"] == []


def test_create_course_short_description(client, auth_headers):
    response = client.post(
        "/api/courses", headers=auth_headers, json={**COURSE, "description": "Too short"}
    )
    assert response.status_code == 400


def test_drafts_hidden_from_listing(client, auth_headers, course):
    draft = create_course(client, auth_headers, title="Draft course", isPublished=False)

    public = client.get("/api/courses").json()
    assert [c["id"] for c in public["data"]] == [course["id"]]

    assert client.get(f"/api/courses/{draft['id']}").status_code == 404
    assert client.get(f"/api/courses/{draft['id']}", headers=auth_headers).status_code == 200

    mine = client.get("/api/courses", params={"published": "false"}, headers=auth_headers).json()
    assert mine["total"] == 2


def test_enroll(client, course, other_headers, auth_headers):
    url = f"/api/courses/{course['id']}/enroll"

    response = client.post(url, headers=other_headers)
    assert response.status_code == 200
    assert response.json()["data"]["enrolledStudents"] == [other_headers.user_id]

    again = client.post(url, headers=other_headers)
    assert again.status_code == 400
    assert again.json() == {"success": False, "message": "Already enrolled in this course"}

    notifications = client.get("/api/notifications", headers=auth_headers).json()
    assert notifications["data"][0]["type"] == "enrollment"


def test_complete_requires_enrollment(client, course, other_headers):
    response = client.post(f"/api/courses/{course['id']}/complete", headers=other_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Not enrolled in this course"


def test_review_requires_completion(client, course, other_headers):
    client.post(f"/api/courses/{course['id']}/enroll", headers=other_headers)

    response = client.post(f"/api/courses/{course['id']}/review", headers=other_headers, json=REVIEW)
    assert response.status_code == 400
    assert response.json()["message"] == "Must complete course before reviewing"


def test_reviews_update_average(client, course, register):
    first = register("First Student", "first@example.com")
    second = register("Second Student", "second@example.com")
    base = f"/api/courses/{course['id']}"

    for headers, rating in ((first, 5), (second, 4)):
        client.post(f"{base}/enroll", headers=headers)
        completed = client.post(f"{base}/complete", headers=headers)
        assert headers.user_id in completed.json()["data"]["completedStudents"]
        response = client.post(f"{base}/review", headers=headers, json={**REVIEW, "rating": rating})
        assert response.status_code == 200

    data = response.json()["data"]
    assert data["rating"] == {"average": 4.5, "count": 2}
    assert len(data["reviews"]) == 2

    duplicate = client.post(f"{base}/review", headers=first, json=REVIEW)
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "You have already reviewed this course"


def test_my_courses_by_type(client, course, auth_headers, other_headers):
    client.post(f"/api/courses/{course['id']}/enroll", headers=other_headers)

    def ids(headers, list_type):
        response = client.get("/api/courses/my", headers=headers, params={"type": list_type})
        return [c["id"] for c in response.json()["data"]]

    assert ids(auth_headers, "created") == [course["id"]]
    assert ids(other_headers, "enrolled") == [course["id"]]
    assert ids(other_headers, "completed") == []

    client.post(f"/api/courses/{course['id']}/complete", headers=other_headers)
    assert ids(other_headers, "completed") == [course["id"]]


def test_only_instructor_can_modify(client, course, auth_headers, other_headers):
    url = f"/api/courses/{course['id']}"

    assert client.put(url, headers=other_headers, json={"price": 10}).status_code == 404

    response = client.put(url, headers=auth_headers, json={"price": 10})
    assert response.json()["data"]["price"] == 10

    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.get(url).status_code == 404


def test_enroll_refreshes_updated_at(client, db, course, other_headers):
    db.query(Course).filter(Course.id == course["id"]).update(
        {Course.updated_at: datetime(2020, 1, 1)}
    )
    db.commit()

    response = client.post(f"/api/courses/{course['id']}/enroll", headers=other_headers)
    assert response.status_code == 200
    assert not response.json()["data"]["updatedAt"].startswith("2020")
