"""
Data Loader Script - Seeds a running SLAT API from a JSON roster.

The roster file holds courses, lecturers, students, lecturer assignments and
student registrations:

    {
      "courses": [{"courseCode": "CSC101", "courseTitle": "Intro to CS", "courseUnit": 3}],
      "lecturers": [{"email": "a@x.com", "firstName": "A", "lastName": "B"}],
      "students": [{"email": "s@x.com", "matricNo": "F/HD/20/001", "firstName": "S", "lastName": "T"}],
      "assignments": [{"lecturerEmail": "a@x.com", "courseCode": "CSC101"}],
      "registrations": [{"matricNo": "F/HD/20/001", "courseCodes": ["CSC101"]}]
    }

Usage:
    python seed_data.py roster.json                          # Uses default URL
    python seed_data.py roster.json http://localhost:8000    # Custom API URL
"""

import json
import os
import sys

import httpx


def _envelope(response: httpx.Response) -> dict:
    try:
        return response.json()
    except ValueError:
        return {"result": None, "errorMessage": response.text}


def seed(client, roster: dict) -> dict:
    """
    Push a roster through the API with an httpx-compatible client.

    Returns a summary of what was created and every error message or
    warning the API reported. Later steps use ids returned by earlier ones,
    so courses, lecturers and students are created first.
    """
    summary = {"courses": 0, "lecturers": 0, "students": 0,
               "assignments": 0, "registrations": 0,
               "warnings": [], "errors": []}
    course_ids = {}
    lecturer_ids = {}
    student_ids = {}

    if roster.get("courses"):
        body = _envelope(client.post("/courses/batch", json=roster["courses"]))
        if body.get("errorMessage"):
            summary["errors"].append("courses: {}".format(body["errorMessage"]))
        for course in body.get("result") or []:
            course_ids[course["courseCode"]] = course["courseId"]
        summary["courses"] = len(course_ids)

    if roster.get("lecturers"):
        body = _envelope(client.post("/lecturers/batch", json=roster["lecturers"]))
        if body.get("errorMessage"):
            summary["errors"].append("lecturers: {}".format(body["errorMessage"]))
        for lecturer in body.get("result") or []:
            lecturer_ids[lecturer["email"]] = lecturer["id"]
        summary["lecturers"] = len(lecturer_ids)

    if roster.get("students"):
        body = _envelope(client.post("/students/batch", json=roster["students"]))
        if body.get("errorMessage"):
            summary["errors"].append("students: {}".format(body["errorMessage"]))
        for student in body.get("result") or []:
            student_ids[student["matricNo"]] = student["id"]
        for warning in ((body.get("warningResult") or {}).get("warnings") or []):
            summary["warnings"].append(warning["detail"])
        summary["students"] = len(student_ids)

    for assignment in roster.get("assignments", []):
        lecturer_id = lecturer_ids.get(assignment["lecturerEmail"].strip().lower())
        course_id = course_ids.get(assignment["courseCode"])
        body = _envelope(client.post("/lecturer-courses", json={
            "lecturerId": lecturer_id, "courseId": course_id
        }))
        if body.get("errorMessage"):
            summary["errors"].append("assignment {} -> {}: {}".format(
                assignment["lecturerEmail"], assignment["courseCode"], body["errorMessage"]))
        else:
            summary["assignments"] += 1

    for registration in roster.get("registrations", []):
        student_id = student_ids.get(registration["matricNo"].replace(" ", "").upper())
        body = _envelope(client.post("/student-courses", json={
            "studentId": student_id,
            "courseIds": [course_ids.get(code, code) for code in registration["courseCodes"]],
        }))
        if body.get("errorMessage"):
            summary["errors"].append("registration {}: {}".format(
                registration["matricNo"], body["errorMessage"]))
            continue
        summary["registrations"] += len(body["result"]["registeredCourseIds"])
        for warning in ((body.get("warningResult") or {}).get("warnings") or []):
            summary["warnings"].append(warning["detail"])

    return summary


def main():
    if len(sys.argv) < 2:
        print("Usage: python seed_data.py roster.json [API_URL]")
        sys.exit(1)

    roster_file = sys.argv[1]
    api_url = sys.argv[2] if len(sys.argv) > 2 else os.getenv("API_URL", "http://localhost:8000")

    if not os.path.exists(roster_file):
        print(f"Error: Could not find {roster_file}")
        sys.exit(1)

    print(f"Loading roster from: {roster_file}")
    with open(roster_file, 'r') as f:
        roster = json.load(f)

    print(f"Sending to: {api_url}")
    print()

    with httpx.Client(base_url=api_url, timeout=30.0) as client:
        summary = seed(client, roster)

    print("=" * 60)
    print("SEED SUMMARY")
    print("=" * 60)
    print(f"  Courses:        {summary['courses']}")
    print(f"  Lecturers:      {summary['lecturers']}")
    print(f"  Students:       {summary['students']}")
    print(f"  Assignments:    {summary['assignments']}")
    print(f"  Registrations:  {summary['registrations']}")
    print("=" * 60)

    for warning in summary["warnings"]:
        print(f"  ⚠️  {warning}")
    for error in summary["errors"]:
        print(f"  ❌ {error}")

    print()
    print("✅ Seeding complete!" if not summary["errors"] else "Seeding finished with errors.")


if __name__ == "__main__":
    main()
