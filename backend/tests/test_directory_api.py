"""
Tests for the school and teacher directory routes.
"""

from voicegrade.models import School, Teacher


class TestSchools:
    def test_list_schools_is_public_and_sorted(self, client, db_session, school):
        db_session.add(School(name="Adams Academy"))
        db_session.commit()

        response = client.get("/api/v1/schools")
        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Adams Academy", "Lincoln High School"]

    def test_create_school(self, client, auth_headers):
        response = client.post(
            "/api/v1/schools",
            json={"name": "  Roosevelt Charter  ", "type": "charter", "location": ""},
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Roosevelt Charter"
        assert data["type"] == "charter"
        assert data["location"] is None
        assert data["teacher_count"] == 0

    def test_create_school_requires_auth(self, client):
        response = client.post("/api/v1/schools", json={"name": "Nope"})
        assert response.status_code == 401

    def test_create_school_rejects_blank_name(self, client, db_session, auth_headers):
        response = client.post("/api/v1/schools", json={"name": "   "}, headers=auth_headers)
        assert response.status_code == 400
        assert db_session.query(School).count() == 0

    def test_create_school_rejects_unknown_type(self, client, auth_headers):
        response = client.post(
            "/api/v1/schools", json={"name": "X", "type": "boarding"}, headers=auth_headers
        )
        assert response.status_code == 400


class TestTeachers:
    def test_list_active_teachers(self, client, db_session, school, teacher):
        db_session.add(Teacher(school_id=school.id, name="Mr. Inactive", is_active=False))
        db_session.add(Teacher(school_id=school.id, name="Dr. Adams"))
        db_session.commit()

        response = client.get(f"/api/v1/schools/{school.id}/teachers")
        assert response.status_code == 200
        assert [t["name"] for t in response.json()] == ["Dr. Adams", "Ms. Rivera"]

    def test_list_teachers_unknown_school(self, client):
        response = client.get("/api/v1/schools/missing/teachers")
        assert response.status_code == 404
        assert response.json() == {"error": "School not found"}

    def test_create_teacher_bumps_count(self, client, db_session, auth_headers, school):
        response = client.post(
            "/api/v1/teachers",
            json={
                "school_id": school.id,
                "name": "Mr. Okafor",
                "subjects": ["History", " ", "Civics "],
                "grading_style": "Values clear argument",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["subjects"] == ["History", "Civics"]
        assert data["is_active"] is True

        db_session.expire_all()
        assert db_session.get(School, school.id).teacher_count == 1

    def test_create_teacher_rejects_blank_name(self, client, db_session, auth_headers, school):
        response = client.post(
            "/api/v1/teachers", json={"school_id": school.id, "name": " \t "}, headers=auth_headers
        )
        assert response.status_code == 400
        assert db_session.query(Teacher).count() == 0

    def test_create_teacher_unknown_school(self, client, auth_headers):
        response = client.post(
            "/api/v1/teachers",
            json={"school_id": "missing", "name": "Mr. Nobody"},
            headers=auth_headers,
        )
        assert response.status_code == 404
