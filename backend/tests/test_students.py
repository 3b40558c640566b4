from slat.models import Student, StudentCourse
from slat.responses import (
    COURSE_ALREADY_REGISTERED, COURSE_NOT_FOUND, STUDENT_ALREADY_EXISTS,
    STUDENT_RECORD_INVALID,
)


def _student(email, matric_no, first="S", last="T"):
    return {"email": email, "matricNo": matric_no, "firstName": first, "lastName": last}


def test_create_student(client, student):
    assert student["matricNo"] == "F/HD/20/001"
    assert student["email"] == "ada@student.edu"
    assert "accessCode" not in student


def test_duplicate_student_is_forbidden(client, count_rows, student):
    response = client.post("/students", json=_student("other@x.com", "f/hd/20/001"))

    assert response.status_code == 403
    assert count_rows(Student) == 1


def test_student_batch_skips_collisions(client, count_rows):
    response = client.post("/students/batch", json=[
        _student("one@x.com", "F/HD/20/100"),
        _student("two@x.com", "F/HD/20/100"),
        _student("three@x.com", "F/HD/20/300"),
    ])

    assert response.status_code == 200
    body = response.json()
    assert [s["matricNo"] for s in body["result"]] == ["F/HD/20/100", "F/HD/20/300"]
    warnings = body["warningResult"]["warnings"]
    assert len(warnings) == 1
    assert warnings[0]["code"] == STUDENT_ALREADY_EXISTS
    assert warnings[0]["status"] == 403
    assert count_rows(Student) == 2


def test_student_batch_against_stored_and_invalid(client, count_rows, student):
    response = client.post("/students/batch", json=[
        _student("ADA@student.edu", "F/HD/20/555"),
        {"email": "x@x.com", "firstName": "No", "lastName": "Matric"},
        _student("new@x.com", "F/HD/20/556"),
    ])

    body = response.json()
    assert [s["email"] for s in body["result"]] == ["new@x.com"]
    codes = [w["code"] for w in body["warningResult"]["warnings"]]
    assert codes == [STUDENT_ALREADY_EXISTS, STUDENT_RECORD_INVALID]
    assert count_rows(Student) == 2


def test_student_batch_without_problems_has_empty_warnings(client):
    response = client.post("/students/batch", json=[_student("one@x.com", "F/HD/20/100")])
    assert response.json()["warningResult"] == {"warnings": []}


def test_get_student_by_matric_with_slashes(client, student):
    response = client.get("/students/F/HD/20/001")

    assert response.status_code == 200
    assert response.json()["result"]["id"] == student["id"]


def test_get_unknown_student(client):
    response = client.get("/students/F/HD/99/999")
    assert response.status_code == 404


def test_list_students(client, student):
    response = client.get("/students")
    assert [s["id"] for s in response.json()["result"]] == [student["id"]]


def test_update_photo(client, student):
    response = client.post("/students/photo", json={"id": student["id"], "encodedPhoto": "aGVsbG8="})

    assert response.status_code == 200
    assert response.json()["result"]["photo"] == "aGVsbG8="
    assert client.get("/students/F/HD/20/001").json()["result"]["photo"] == "aGVsbG8="


def test_update_photo_requires_photo(client, student):
    response = client.post("/students/photo", json={"id": student["id"]})
    assert response.status_code == 400
    assert response.json()["errorMessage"] == (
        "This operation require a student's photo base 64 encoded format.")


def test_update_photo_unknown_student(client):
    response = client.post("/students/photo", json={"id": "nobody", "encodedPhoto": "eA=="})
    assert response.status_code == 404


def test_register_courses_with_warnings(client, count_rows, student, course):
    client.post("/student-courses", json={"studentId": student["id"], "courseIds": [course["courseId"]]})

    response = client.post("/student-courses", json={
        "studentId": student["id"], "courseIds": [course["courseId"], "unknown-course"]
    })

    assert response.status_code == 200
    body = response.json()
    assert body["result"]["registeredCourseIds"] == []
    warnings = body["warningResult"]["warnings"]
    assert [(w["status"], w["code"]) for w in warnings] == [
        (300, COURSE_ALREADY_REGISTERED), (404, COURSE_NOT_FOUND)]
    assert count_rows(StudentCourse) == 1


def test_register_same_course_twice_in_one_request(client, count_rows, student, course):
    response = client.post("/student-courses", json={
        "studentId": student["id"], "courseIds": [course["courseId"], course["courseId"]]
    })

    body = response.json()
    assert body["result"]["registeredCourseIds"] == [course["courseId"]]
    assert len(body["warningResult"]["warnings"]) == 1
    assert count_rows(StudentCourse) == 1


def test_register_courses_validation(client, student):
    empty = client.post("/student-courses", json={"studentId": student["id"], "courseIds": []})
    assert empty.status_code == 400
    assert empty.json()["errorMessage"] == "A minimum of one course is required."

    blank = client.post("/student-courses", json={"studentId": student["id"], "courseIds": ["", "x"]})
    assert blank.status_code == 400
    assert blank.json()["errorMessage"] == "Not all course id are valid"

    unknown = client.post("/student-courses", json={"studentId": "nobody", "courseIds": ["x"]})
    assert unknown.status_code == 404


def test_list_student_courses(client, registered_student, course):
    response = client.get("/student-courses", params={"matricNumber": "f/hd/20/001"})

    assert response.status_code == 200
    assert [c["courseId"] for c in response.json()["result"]] == [course["courseId"]]
