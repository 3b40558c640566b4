# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from slat.config import Settings
from slat.main import create_app
from slat.services.mailer import MailDeliveryError


class RecordingMailer:
    """Stands in for SmtpMailer; keeps every message instead of sending it."""

    def __init__(self):
        self.sent = []
        self.fail_with = None

    def send(self, recipient, subject, html_body):
        if self.fail_with:
            raise MailDeliveryError(self.fail_with)
        self.sent.append({"recipient": recipient, "subject": subject, "body": html_body})


class CodeSequence:
    """Hands out access codes from a fixed list, in order."""

    def __init__(self, *codes):
        self.codes = list(codes)
        self.issued = []

    def __call__(self):
        code = self.codes.pop(0)
        self.issued.append(code)
        return code


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def codes():
    return CodeSequence(482913, 130077, 777001, 250250)


@pytest.fixture
def app(mailer, codes):
    settings = Settings(database_url="sqlite://", log_level="WARNING")
    application = create_app(settings, mailer=mailer, code_generator=codes)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def count_rows(app):
    """count_rows(Model) -> number of rows currently stored."""
    def _count(model, **filters):
        db = app.state.session_factory()
        try:
            return db.query(model).filter_by(**filters).count()
        finally:
            db.close()
    return _count


@pytest.fixture
def course(client):
    response = client.post("/courses", json={
        "courseCode": "CSC101", "courseTitle": "Intro to CS", "courseUnit": 3
    })
    return response.json()["result"]


@pytest.fixture
def lecturer(client):
    response = client.post("/lecturers", json={
        "email": "a@x.com", "firstName": "A", "lastName": "B"
    })
    return response.json()["result"]


@pytest.fixture
def student(client):
    response = client.post("/students", json={
        "email": "ada@student.edu", "matricNo": "F/HD/20/001",
        "firstName": "Ada", "lastName": "Obi"
    })
    return response.json()["result"]


@pytest.fixture
def assigned(client, course, lecturer):
    client.post("/lecturer-courses", json={
        "lecturerId": lecturer["id"], "courseId": course["courseId"]
    })
    return {"course": course, "lecturer": lecturer}


@pytest.fixture
def lecture(client, assigned):
    response = client.post("/lectures", json={
        "lecturerId": assigned["lecturer"]["id"],
        "courseId": assigned["course"]["courseId"],
    })
    return response.json()["result"]


@pytest.fixture
def registered_student(client, student, course):
    client.post("/student-courses", json={
        "studentId": student["id"], "courseIds": [course["courseId"]]
    })
    return student
