from __future__ import annotations

import json

import pytest

from classroom_attendance.main import create_app, load_settings
from classroom_attendance.outbox.store import MemoryStore

PRIMARY = "http://primary.test/api"
SCAN = json.dumps(
    {
        "classId": "C1",
        "subjectCode": "IT101",
        "yearSection": "BSIT 2A",
        "className": "IT101 BSIT 2A",
        "timestamp": "2024-03-01T08:00:00.000Z",
        "type": "attendance",
        "secureKey": "TTPO_2024_ATTENDANCE",
        "version": "1.0",
    }
)
USER = {"userId": "S1", "firstName": "Ana", "lastName": "Reyes"}


@pytest.fixture
def app_client(fake_session):
    store = MemoryStore()
    app = create_app(settings=load_settings("config.testing"), session=fake_session, store=store)
    client = app.test_client()
    client.put("/api/session", json={"token": "tok-123", "user": USER})
    return client, store


def test_requires_session(fake_session):
    app = create_app(settings=load_settings("config.testing"), session=fake_session, store=MemoryStore())

    resp = app.test_client().post("/api/scan", json={"data": SCAN})

    assert resp.status_code == 401


def test_scan_confirmed_by_server(app_client, fake_session, respond):
    client, _ = app_client
    fake_session.add("GET", f"{PRIMARY}/test", respond(200, {"ok": True}))
    fake_session.add("POST", f"{PRIMARY}/attendance", lambda call: respond(201, {"attendance": {**call["json"], "_id": "srv-1"}}))

    resp = client.post("/api/scan", json={"data": SCAN, "location": {"latitude": 14.6, "longitude": 121.0}})

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["outcome"] == "confirmed"
    assert body["pending_sync"] is False
    sent = fake_session.calls_to("POST", f"{PRIMARY}/attendance")[0]
    assert sent["json"]["status"] == "present"
    assert sent["json"]["recordedVia"] == "qr"
    assert sent["json"]["studentId"] == "S1"
    assert sent["json"]["location"] == {"latitude": 14.6, "longitude": 121.0}
    assert sent["headers"]["Authorization"] == "Bearer tok-123"
    assert client.get("/api/records").get_json() == []


def test_all_servers_down_queues_scan(app_client, fake_session):
    client, _ = app_client

    resp = client.post("/api/scan", json={"data": SCAN})

    assert resp.status_code == 202
    body = resp.get_json()
    assert body["pending_sync"] is True
    assert [c["url"] for c in fake_session.calls] == [
        "http://primary.test/api/test",
        "http://lan.test/api/test",
        "http://127.0.0.1:5000/api/test",
    ]
    records = client.get("/api/records").get_json()
    assert len(records) == 1
    assert records[0]["classId"] == "C1"
    assert records[0]["class"] == "IT101 BSIT 2A"


def test_forged_scan_is_rejected_without_network(app_client, fake_session):
    client, _ = app_client

    resp = client.post(
        "/api/scan",
        json={"data": '{"type":"attendance","secureKey":"WRONG","version":"1.0","classId":"C1"}'},
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "SecurityValidationFailed"
    assert fake_session.calls == []


def test_not_enrolled_is_reported_distinctly(app_client, fake_session, respond):
    client, _ = app_client
    fake_session.add("GET", f"{PRIMARY}/test", respond(200, {}))
    fake_session.add("POST", f"{PRIMARY}/attendance", respond(404, {"message": "Student not found in this class"}))

    resp = client.post("/api/scan", json={"data": SCAN})

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NotEnrolled"


def test_rejected_credentials_ask_for_login(app_client, fake_session, respond):
    client, store = app_client
    fake_session.add("GET", f"{PRIMARY}/test", respond(200, {}))
    fake_session.add("POST", f"{PRIMARY}/attendance", respond(401, {"message": "invalid token"}))

    resp = client.post("/api/scan", json={"data": SCAN})

    assert resp.status_code == 401
    assert "log in again" in resp.get_json()["message"]
    assert len(fake_session.calls_to("POST", f"{PRIMARY}/attendance")) == 2
    assert store.get("token") is None

    fake_session.add("GET", f"{PRIMARY}/reports", respond(200, []))
    client.get("/api/reports/overview")
    later = fake_session.calls_to("GET", f"{PRIMARY}/reports")[0]
    assert "Authorization" not in later["headers"]


def test_clear_records(app_client):
    client, _ = app_client
    client.post("/api/scan", json={"data": SCAN})

    assert client.delete("/api/records").status_code == 200
    assert client.get("/api/records").get_json() == []


def test_sync_reports(app_client, fake_session, respond):
    client, _ = app_client
    fake_session.add("GET", f"{PRIMARY}/test", respond(200, {}))
    fake_session.add("GET", f"{PRIMARY}/classes", respond(200, [{"_id": "C1", "className": "IT101 BSIT 2A", "subjectCode": "IT101"}]))
    fake_session.add(
        "GET",
        f"{PRIMARY}/students/C1",
        respond(
            200,
            [
                {"studentId": "S1", "firstName": "Ana", "lastName": "Reyes"},
                {"studentId": "S2", "firstName": "Ben", "lastName": "Cruz"},
                {"studentId": "S3", "firstName": "Cara", "lastName": "Lim"},
            ],
        ),
    )
    fake_session.add(
        "GET",
        f"{PRIMARY}/attendance/class/C1",
        respond(200, {"attendance": [{"studentId": "S1", "classId": "C1", "timestamp": "2024-03-01T08:05:00.000Z", "status": "present"}]}),
    )
    fake_session.add("POST", f"{PRIMARY}/reports", respond(200, {"message": "Report saved successfully"}))

    resp = client.post("/api/reports/sync", json={})

    assert resp.get_json()["succeeded"] == 1
    assert resp.get_json()["failed"] == 0
    saved = fake_session.calls_to("POST", f"{PRIMARY}/reports")[0]["json"]
    assert saved["date"] == "2024-03-01"
    assert (saved["totalStudents"], saved["presentCount"], saved["absentCount"]) == (3, 1, 2)
    assert [s["status"] for s in saved["students"]] == ["present", "absent", "absent"]


def test_sync_skips_unreadable_events(app_client, fake_session, respond):
    client, _ = app_client
    fake_session.add("GET", f"{PRIMARY}/test", respond(200, {}))
    fake_session.add("GET", f"{PRIMARY}/classes", respond(200, [{"_id": "C1", "className": "IT101 BSIT 2A", "subjectCode": "IT101"}]))
    fake_session.add("GET", f"{PRIMARY}/students/C1", respond(200, [{"studentId": "S1", "firstName": "Ana", "lastName": "Reyes"}]))
    fake_session.add(
        "GET",
        f"{PRIMARY}/attendance/class/C1",
        respond(
            200,
            {
                "attendance": [
                    {"studentId": "S1", "classId": "C1", "timestamp": "2024-03-01T08:05:00.000Z", "status": "present"},
                    {"studentId": "S1", "classId": "C1", "timestamp": "2024-03-02T08:05:00.000Z", "status": "excused"},
                    {"studentId": "S1", "classId": "C1", "status": "present"},
                    {"studentId": "", "classId": "C1", "timestamp": "2024-03-03T08:05:00.000Z", "status": "present"},
                ]
            },
        ),
    )
    fake_session.add("POST", f"{PRIMARY}/reports", respond(200, {"message": "Report saved successfully"}))

    resp = client.post("/api/reports/sync", json={})

    assert (resp.get_json()["succeeded"], resp.get_json()["failed"]) == (1, 0)
    saved = fake_session.calls_to("POST", f"{PRIMARY}/reports")
    assert [c["json"]["date"] for c in saved] == ["2024-03-01"]
    assert saved[0]["json"]["presentCount"] == 1


def test_reports_overview(app_client, fake_session, respond):
    client, _ = app_client
    fake_session.add("GET", f"{PRIMARY}/test", respond(200, {}))
    fake_session.add(
        "GET",
        f"{PRIMARY}/reports",
        respond(200, [{"date": "2024-03-01", "classId": "C1", "totalStudents": 3, "presentCount": 1, "absentCount": 2}]),
    )

    resp = client.get("/api/reports/overview?today=2024-03-07")

    body = resp.get_json()
    assert body["startDate"] == "2024-03-01"
    assert (body["total"], body["present"], body["percentage"]) == (3, 1, 33)
    assert fake_session.calls_to("GET", f"{PRIMARY}/reports")[0]["params"] == {"startDate": "2024-03-01", "endDate": "2024-03-07"}


def test_overview_accepts_reports_with_uncounted_students(app_client, fake_session, respond):
    client, _ = app_client
    fake_session.add("GET", f"{PRIMARY}/test", respond(200, {}))
    fake_session.add(
        "GET",
        f"{PRIMARY}/reports",
        respond(
            200,
            [
                {"date": "2024-03-01", "classId": "C1", "totalStudents": 2, "presentCount": 1, "absentCount": 1},
                {
                    "date": "2024-03-02",
                    "classId": "C1",
                    "totalStudents": 3,
                    "presentCount": 1,
                    "absentCount": 1,
                    "students": [
                        {"studentId": "S1", "status": "present"},
                        {"studentId": "S2", "status": "absent"},
                        {"studentId": "S3", "status": "late"},
                    ],
                },
            ],
        ),
    )

    resp = client.get("/api/reports/overview?today=2024-03-07")

    assert resp.status_code == 200
    assert (resp.get_json()["total"], resp.get_json()["present"], resp.get_json()["reports"]) == (5, 2, 2)


def test_class_qr_payload(app_client):
    client, _ = app_client

    resp = client.get("/api/classes/C1/qr?subjectCode=IT101&yearSection=BSIT%202A&format=json")

    data = json.loads(resp.data)
    assert data["classId"] == "C1"
    assert data["secureKey"] == "TTPO_2024_ATTENDANCE"


@pytest.mark.parametrize("class_ids", ["A", [1, 2], ["C1", ""], {"id": "C1"}])
def test_sync_rejects_malformed_class_ids(app_client, fake_session, class_ids):
    client, _ = app_client

    resp = client.post("/api/reports/sync", json={"classIds": class_ids})

    assert resp.status_code == 400
    assert fake_session.calls == []
