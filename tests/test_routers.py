# /tests/test_routers.py

def test_health_check(api_client):
    response = api_client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"

# --- Students ---

def test_list_and_search_students(api_client):
    response = api_client.get("/api/students")
    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [1, 2, 3]

    response = api_client.get("/api/students", params={"status": "inactive"})
    assert [s["id"] for s in response.json()] == [3]

def test_create_get_and_delete_student(api_client):
    response = api_client.post("/api/students", json={"firstName": "Noah", "lastName": "Davis", "grade": "5th Grade"})
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == 4
    assert created["status"] == "active"

    assert api_client.get("/api/students/4").json()["lastName"] == "Davis"
    assert api_client.delete("/api/students/4").status_code == 204
    assert api_client.get("/api/students/4").status_code == 404

def test_non_numeric_id_is_bad_request(api_client):
    response = api_client.get("/api/students/abc")
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidArgumentError"

def test_deleting_missing_student_is_not_found(api_client):
    assert api_client.delete("/api/students/99").status_code == 404

def test_student_sub_resources(api_client):
    communications = api_client.get("/api/students/1/communications").json()
    assert [c["id"] for c in communications] == [2, 1]
    assert [g["id"] for g in api_client.get("/api/students/1/grades").json()] == [1, 2]
    assert [a["id"] for a in api_client.get("/api/students/1/attendance").json()] == [1, 3]

# --- Assignments and Grades ---

def test_update_assignment(api_client):
    response = api_client.put("/api/assignments/2", json={"title": "Quiz (retake)", "totalPoints": 40})
    assert response.status_code == 200
    assert response.json()["totalPoints"] == 40

def test_filter_grades(api_client):
    by_assignment = api_client.get("/api/grades", params={"assignmentId": "1"}).json()
    assert sorted(g["studentId"] for g in by_assignment) == [1, 2]
    both = api_client.get("/api/grades", params={"studentId": "1", "assignmentId": "2"}).json()
    assert [g["id"] for g in both] == [2]

def test_grade_entry_and_book(api_client):
    response = api_client.post("/api/grades/entry", json={"studentId": 3, "assignmentId": 1, "score": 100})
    assert response.status_code == 200

    book = api_client.get("/api/grades/book/1").json()
    assert book["classAverage"] == 87
    assert [row["band"] for row in book["rows"]] == ["excellent", "fair", "excellent"]

# --- Attendance ---

def test_mark_attendance_and_breakdown(api_client):
    response = api_client.post("/api/attendance/mark", json={"studentId": 3, "date": "2024-01-15", "status": "late"})
    assert response.status_code == 200
    assert response.json()["reason"] == "Late arrival"

    breakdown = api_client.get("/api/attendance/breakdown", params={"date": "2024-01-15"}).json()
    assert breakdown == {"date": "2024-01-15", "present": 1, "absent": 1, "late": 1, "excused": 0}

def test_mark_all_present(api_client):
    response = api_client.post("/api/attendance/mark-all-present", json={"date": "2024-01-16"})
    assert response.status_code == 200
    assert len(response.json()) == 3
    day = api_client.get("/api/attendance", params={"date": "2024-01-16"}).json()
    assert {r["status"] for r in day} == {"present"}

def test_marking_unmarked_is_rejected(api_client):
    response = api_client.post("/api/attendance/mark", json={"studentId": 1, "date": "2024-01-15", "status": "unmarked"})
    assert response.status_code == 400

# --- Communications ---

def test_log_communication(api_client):
    response = api_client.post(
        "/api/communications",
        json={"studentId": 2, "type": "meeting", "subject": "Conference", "date": "2024-02-01", "followUpRequired": True},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["createdAt"]
    assert body["followUpRequired"] is True
    assert [c["id"] for c in api_client.get("/api/communications", params={"studentId": "2"}).json()] == [4, 3]

# --- Dashboard and Reports ---

def test_dashboard_summary(api_client):
    summary = api_client.get("/api/dashboard/summary").json()
    assert summary["totalStudents"] == 3
    assert summary["averageGrade"] == 80
    assert summary["attendanceRate"] == 33

def test_class_report(api_client):
    report = api_client.get("/api/reports", params={"top": 1}).json()
    assert report["topPerformers"][0]["student"]["id"] == 1
    assert report["gradeDistribution"] == {"5th Grade": 2, "4th Grade": 1}

def test_plain_attendance_write_cannot_store_unmarked(api_client):
    response = api_client.post("/api/attendance", json={"studentId": 1, "date": "2024-01-17"})
    assert response.status_code == 400
    response = api_client.put("/api/attendance/1", json={"studentId": 1, "date": "2024-01-15", "status": "unmarked"})
    assert response.status_code == 400
    assert api_client.get("/api/dashboard/summary").json()["attendanceRate"] == 33

def test_combined_filters_reject_non_numeric_ids(api_client):
    response = api_client.get("/api/attendance", params={"studentId": "abc", "date": "2024-01-15"})
    assert response.status_code == 400
    response = api_client.get("/api/grades", params={"studentId": "1", "assignmentId": "abc"})
    assert response.status_code == 400

def test_combined_attendance_filter(api_client):
    day = api_client.get("/api/attendance", params={"studentId": "2", "date": "2024-01-15"}).json()
    assert [r["id"] for r in day] == [2]
