from slat.services.reports import rank


def test_rank_orders_by_count_and_keeps_ties_stable():
    rows = [
        {"name": "a", "attendanceCount": 1},
        {"name": "b", "attendanceCount": 3},
        {"name": "c", "attendanceCount": 1},
        {"name": "d", "attendanceCount": 0},
    ]

    ranked = rank(rows)

    assert [r["name"] for r in ranked] == ["b", "a", "c", "d"]
    assert [r["rank"] for r in ranked] == [1, 2, 3, 4]


def test_rank_of_nothing():
    assert rank([]) == []


def _setup_school(client):
    """Two courses, two lecturers, three students; returns ids by name."""
    courses = client.post("/courses/batch", json=[
        {"courseCode": "CSC101", "courseTitle": "Intro to CS", "courseUnit": 3},
        {"courseCode": "MTH101", "courseTitle": "Calculus", "courseUnit": 2},
    ]).json()["result"]
    lecturers = client.post("/lecturers/batch", json=[
        {"email": "cs@x.com", "firstName": "Cee", "lastName": "Ess"},
        {"email": "math@x.com", "firstName": "Em", "lastName": "Ath"},
    ]).json()["result"]
    students = client.post("/students/batch", json=[
        {"email": "s1@x.com", "matricNo": "S1", "firstName": "One", "lastName": "S"},
        {"email": "s2@x.com", "matricNo": "S2", "firstName": "Two", "lastName": "S"},
        {"email": "s3@x.com", "matricNo": "S3", "firstName": "Three", "lastName": "S"},
    ]).json()["result"]
    csc, mth = courses
    cs_lecturer, math_lecturer = lecturers

    client.post("/lecturer-courses", json={"lecturerId": cs_lecturer["id"], "courseId": csc["courseId"]})
    client.post("/lecturer-courses", json={"lecturerId": math_lecturer["id"], "courseId": mth["courseId"]})
    for s in students:
        client.post("/student-courses", json={"studentId": s["id"], "courseIds": [csc["courseId"], mth["courseId"]]})

    csc_lecture = client.post("/lectures", json={
        "lecturerId": cs_lecturer["id"], "courseId": csc["courseId"]}).json()["result"]
    mth_lecture = client.post("/lectures", json={
        "lecturerId": math_lecturer["id"], "courseId": mth["courseId"]}).json()["result"]

    # S2 attends both, S1 and S3 only calculus
    for matric in ("S1", "S2", "S3"):
        client.post("/attendance", json={"matricNo": matric, "lectureId": mth_lecture["id"]})
    client.post("/attendance", json={"matricNo": "S2", "lectureId": csc_lecture["id"]})

    return {"csc": csc, "mth": mth, "cs_lecturer": cs_lecturer, "math_lecturer": math_lecturer}


def test_students_ranking(client):
    _setup_school(client)

    response = client.get("/reports/students-ranking")

    assert response.status_code == 200
    rows = response.json()["result"]
    assert rows[0]["matricNo"] == "S2"
    assert rows[0]["attendanceCount"] == 2
    assert rows[0]["rank"] == 1
    assert sorted(r["matricNo"] for r in rows[1:]) == ["S1", "S3"]
    assert [r["attendanceCount"] for r in rows[1:]] == [1, 1]
    assert [r["rank"] for r in rows] == [1, 2, 3]


def test_courses_ranking(client):
    school = _setup_school(client)

    rows = client.get("/reports/courses-ranking").json()["result"]

    assert [r["courseId"] for r in rows] == [school["mth"]["courseId"], school["csc"]["courseId"]]
    assert [r["attendanceCount"] for r in rows] == [3, 1]
    assert [r["lectureCount"] for r in rows] == [1, 1]


def test_lecturers_ranking(client):
    school = _setup_school(client)

    rows = client.get("/reports/lecturers-ranking").json()["result"]

    assert [r["id"] for r in rows] == [school["math_lecturer"]["id"], school["cs_lecturer"]["id"]]
    assert [r["attendanceCount"] for r in rows] == [3, 1]
    assert rows[0]["courseCount"] == 1


def test_rankings_on_empty_store(client):
    for report in ("students", "courses", "lecturers"):
        response = client.get(f"/reports/{report}-ranking")
        assert response.status_code == 200
        assert response.json()["result"] == []
