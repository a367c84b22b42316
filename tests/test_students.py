"""Student profile endpoint tests."""


def update_profile(client, headers, **fields):
    return client.put("/api/students/profile/me", headers=headers, json=fields)


def test_get_my_profile(client, auth_headers):
    response = client.get("/api/students/profile/me", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["userId"] == auth_headers.user_id
    assert data["status"] == "active"
    assert data["skills"] == []
    assert data["enrolledCourses"] == []


def test_update_my_profile(client, auth_headers):
    response = update_profile(
        client,
        auth_headers,
        bio="Aspiring backend engineer",
        skills=["Python", " SQL ", ""],
        phone="+15551234567",
        github="https://github.com/test",
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["bio"] == "Aspiring backend engineer"
    assert data["skills"] == ["Python", "SQL"]
    assert data["phone"] == "+15551234567"


def test_update_profile_rejects_bad_phone(client, auth_headers):
    response = update_profile(client, auth_headers, phone="call me maybe")
    assert response.status_code == 400
    assert response.json()["errors"][0]["message"] == "Please enter a valid phone number"


def test_list_students_paginates(client, register):
    for i in range(3):
        register(f"Student {i}", f"student{i}@example.com")

    response = client.get("/api/students", params={"page": 1, "limit": 2})
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["total"] == 3
    assert body["pages"] == 2
    assert body["page"] == 1


def test_list_students_filters_by_skills(client, auth_headers, other_headers):
    update_profile(client, auth_headers, skills=["Python", "Django"])
    update_profile(client, other_headers, skills=["Rust"])

    response = client.get("/api/students", params={"skills": "Go,Django"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert [s["userId"] for s in data] == [auth_headers.user_id]


def test_search_students(client, auth_headers, other_headers):
    update_profile(client, other_headers, bio="Loves distributed systems")

    response = client.get("/api/students/search", params={"search": "distributed"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 1
    assert data[0]["userId"] == other_headers.user_id


def test_list_students_by_status(client, auth_headers):
    response = client.get("/api/students", params={"status": "graduated"})
    assert response.status_code == 200
    assert response.json()["total"] == 0

    response = client.get("/api/students", params={"status": "expelled"})
    assert response.status_code == 400


def test_get_student_by_id(client, auth_headers):
    me = client.get("/api/students/profile/me", headers=auth_headers).json()["data"]

    response = client.get(f"/api/students/{me['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["user"]["email"] == auth_headers.email


def test_get_missing_student(client):
    response = client.get("/api/students/9999")
    assert response.status_code == 404
    assert response.json()["message"] == "Student not found"


def test_delete_student_requires_admin(client, auth_headers, other_headers):
    target = client.get("/api/students/profile/me", headers=other_headers).json()["data"]

    response = client.delete(f"/api/students/{target['id']}", headers=auth_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "User role not authorized to access this route"


def test_admin_deletes_student(client, admin_headers, other_headers):
    target = client.get("/api/students/profile/me", headers=other_headers).json()["data"]

    response = client.delete(f"/api/students/{target['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert client.get(f"/api/students/{target['id']}").status_code == 404
