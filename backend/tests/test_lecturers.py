from slat.models import Lecturer
from slat.services.lecturers import LecturerService


def test_create_lecturer_normalizes_email(client):
    response = client.post("/lecturers", json={
        "email": "  Grace@X.com ", "firstName": "Grace", "lastName": "Hopper"
    })

    assert response.status_code == 200
    lecturer = response.json()["result"]
    assert lecturer["email"] == "grace@x.com"
    assert "accessCode" not in lecturer


def test_duplicate_lecturer_email_is_forbidden(client, count_rows, lecturer):
    response = client.post("/lecturers", json={
        "email": "A@X.COM", "firstName": "Other", "lastName": "Person"
    })

    assert response.status_code == 403
    assert response.json()["errorMessage"] == "Email address already exist"
    assert count_rows(Lecturer) == 1


def test_lecturer_missing_field(client):
    response = client.post("/lecturers", json={"email": "a@x.com", "firstName": "A"})
    assert response.status_code == 400
    assert response.json()["errorMessage"] == "Last name cannot be null"


def test_lecturer_batch_rejects_duplicate_within_batch(client, count_rows):
    response = client.post("/lecturers/batch", json=[
        {"email": "one@x.com", "firstName": "One", "lastName": "L"},
        {"email": "ONE@x.com", "firstName": "Again", "lastName": "L"},
    ])

    assert response.status_code == 403
    assert response.json()["errorMessage"] == "Email address one@x.com, already exist"
    assert count_rows(Lecturer) == 0


def test_lecturer_batch_rejects_stored_email(client, count_rows, lecturer):
    response = client.post("/lecturers/batch", json=[
        {"email": "new@x.com", "firstName": "New", "lastName": "L"},
        {"email": "a@x.com", "firstName": "Old", "lastName": "L"},
    ])

    assert response.status_code == 403
    assert count_rows(Lecturer) == 1


def test_lecturer_batch_creates_all(client, count_rows):
    response = client.post("/lecturers/batch", json=[
        {"email": "one@x.com", "firstName": "One", "lastName": "L"},
        {"email": "two@x.com", "firstName": "Two", "lastName": "L"},
    ])

    assert response.status_code == 200
    assert [lec["email"] for lec in response.json()["result"]] == ["one@x.com", "two@x.com"]
    assert count_rows(Lecturer) == 2


def test_get_lecturer_without_courses(client, lecturer):
    response = client.get(f"/lecturers/{lecturer['id']}")

    assert response.status_code == 200
    assert response.json()["result"]["courses"] is None


def test_get_lecturer_with_courses(client, assigned):
    lecturer_id = assigned["lecturer"]["id"]

    response = client.get(f"/lecturers/{lecturer_id}")

    courses = response.json()["result"]["courses"]
    assert [c["courseCode"] for c in courses] == ["CSC101"]


def test_get_unknown_lecturer(client):
    response = client.get("/lecturers/nobody")
    assert response.status_code == 404


def test_get_lecturer_by_email(client, lecturer):
    response = client.get("/lecturers/by-email", params={"lecturerEmail": "A@x.com"})
    assert response.status_code == 200
    assert response.json()["result"]["id"] == lecturer["id"]

    missing = client.get("/lecturers/by-email", params={"lecturerEmail": "z@x.com"})
    assert missing.status_code == 404
    assert missing.json()["errorMessage"] == "A lecturer with the specified email does not exist."


def test_list_lecturers(client, lecturer):
    response = client.get("/lecturers")
    assert [lec["id"] for lec in response.json()["result"]] == [lecturer["id"]]


def test_attendance_records(client, lecture, registered_student):
    client.post("/attendance", json={
        "matricNo": registered_student["matricNo"], "lectureId": lecture["id"]
    })
    second = client.post("/lectures", json={
        "lecturerId": lecture["lecturerId"], "courseId": lecture["courseId"]
    }).json()["result"]

    response = client.get(f"/lecturers/{lecture['lecturerId']}/attendance-records")

    assert response.status_code == 200
    courses = response.json()["result"]["courses"]
    assert len(courses) == 1
    lectures = courses[0]["lectures"]
    assert [lec["id"] for lec in lectures] == [lecture["id"], second["id"]]
    assert [a["matricNo"] for a in lectures[0]["attendees"]] == ["F/HD/20/001"]
    assert lectures[1]["attendees"] == []


def test_attendance_records_for_unknown_lecturer(client):
    response = client.get("/lecturers/nobody/attendance-records")
    assert response.status_code == 404


def test_email_taken_by_concurrent_request_is_forbidden(client, count_rows, monkeypatch, lecturer):
    # the pre-check misses the row; the unique email constraint catches it at commit
    monkeypatch.setattr(LecturerService, "_email_taken", lambda self, email: False)

    response = client.post("/lecturers", json={
        "email": "a@x.com", "firstName": "Late", "lastName": "Comer"
    })

    assert response.status_code == 403
    assert response.json()["errorMessage"] == "Email address already exist"
    assert count_rows(Lecturer) == 1
