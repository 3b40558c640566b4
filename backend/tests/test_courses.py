import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from slat.models import Course, LecturerCourse


@pytest.mark.parametrize("payload, message", [
    ({"courseCode": "", "courseTitle": "Intro to CS", "courseUnit": 3},
     "Course code cannot be null"),
    ({"courseCode": "CSC101", "courseTitle": "   ", "courseUnit": 3},
     "Course title cannot be null"),
    ({"courseCode": "CSC101", "courseTitle": "Intro to CS", "courseUnit": 0},
     "Course unit cannot be less than or equal to zero"),
    ({"courseCode": "CSC101", "courseTitle": "Intro to CS"},
     "Course unit cannot be less than or equal to zero"),
])
def test_invalid_course_is_rejected_without_a_row(client, count_rows, payload, message):
    response = client.post("/courses", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["result"] is None
    assert body["errorMessage"] == message
    assert count_rows(Course) == 0


def test_create_course_returns_payload(client):
    response = client.post("/courses", json={
        "courseCode": "CSC101", "courseTitle": "Intro to CS",
        "courseUnit": 3, "courseDescription": "Basics"
    })

    assert response.status_code == 200
    body = response.json()
    assert body["errorMessage"] is None
    assert body["warningResult"] is None
    course = body["result"]
    assert course["courseCode"] == "CSC101"
    assert course["courseUnit"] == 3
    assert course["courseDescription"] == "Basics"
    assert course["courseId"]


def test_course_batch_is_all_or_nothing(client, count_rows):
    response = client.post("/courses/batch", json=[
        {"courseCode": "CSC101", "courseTitle": "Intro to CS", "courseUnit": 3},
        {"courseCode": "CSC102", "courseTitle": "Data Structures", "courseUnit": -1},
    ])

    assert response.status_code == 400
    assert response.json()["errorMessage"] == "Course unit cannot be less than or equal to zero"
    assert count_rows(Course) == 0


def test_course_batch_returns_every_course(client, count_rows):
    response = client.post("/courses/batch", json=[
        {"courseCode": "CSC101", "courseTitle": "Intro to CS", "courseUnit": 3},
        {"courseCode": "CSC102", "courseTitle": "Data Structures", "courseUnit": 2},
    ])

    assert response.status_code == 200
    codes = [c["courseCode"] for c in response.json()["result"]]
    assert codes == ["CSC101", "CSC102"]
    assert count_rows(Course) == 2


def test_empty_course_batch_is_rejected(client):
    response = client.post("/courses/batch", json=[])
    assert response.status_code == 400
    assert response.json()["errorMessage"] == "A minimum of one course is required."


def test_get_course_lists_assigned_lecturers(client, assigned):
    course_id = assigned["course"]["courseId"]

    response = client.get(f"/courses/{course_id}")

    assert response.status_code == 200
    course = response.json()["result"]
    assert course["courseCode"] == "CSC101"
    assert [lec["email"] for lec in course["lecturers"]] == ["a@x.com"]


def test_get_unknown_course_is_not_found(client):
    response = client.get("/courses/does-not-exist")
    assert response.status_code == 404
    assert response.json()["result"] is None


def test_list_courses(client, course):
    response = client.get("/courses")
    assert response.status_code == 200
    assert [c["courseId"] for c in response.json()["result"]] == [course["courseId"]]
    assert response.json()["result"][0]["lecturers"] == []


def test_assign_lecturer_once(client, count_rows, course, lecturer):
    payload = {"lecturerId": lecturer["id"], "courseId": course["courseId"]}

    first = client.post("/lecturer-courses", json=payload)
    assert first.status_code == 200
    assert first.json()["result"]["lecturerId"] == lecturer["id"]
    assert first.json()["result"]["courseId"] == course["courseId"]

    second = client.post("/lecturer-courses", json=payload)
    assert second.status_code == 400
    assert second.json()["errorMessage"] == (
        "The specified course was formerly assigned to the specified lecturer")
    assert count_rows(LecturerCourse) == 1


@pytest.mark.parametrize("field", ["lecturerId", "courseId"])
def test_assign_lecturer_to_unknown_record(client, course, lecturer, field):
    payload = {"lecturerId": lecturer["id"], "courseId": course["courseId"]}
    payload[field] = "missing"

    response = client.post("/lecturer-courses", json=payload)

    assert response.status_code == 404


def test_assign_lecturer_requires_ids(client, course):
    response = client.post("/lecturer-courses", json={"courseId": course["courseId"]})
    assert response.status_code == 400
    assert response.json()["errorMessage"] == "Lecturer id is required"


def test_store_failure_passes_driver_message_through(client, count_rows, monkeypatch):
    def locked(self):
        raise OperationalError("INSERT INTO courses", {}, Exception("database is locked"))

    monkeypatch.setattr(Session, "commit", locked)

    response = client.post("/courses", json={
        "courseCode": "CSC101", "courseTitle": "Intro to CS", "courseUnit": 3
    })

    assert response.status_code == 500
    assert "database is locked" in response.json()["errorMessage"]
    assert count_rows(Course) == 0
