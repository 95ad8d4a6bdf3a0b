import pytest

from src.jupiter_hr.jupiter_hr.core.enums import Role


@pytest.fixture
def hr(client, login):
    user = login(Role.HR)
    return client, user


def _evaluation(**extra):
    body = {
        "studentId": "s1",
        "evaluatorId": "hr-1",
        "evaluationType": "quarterly",
        "metrics": [
            {"metricName": "Coding", "score": 80, "maxScore": 100, "weightage": 0.6},
            {"metricName": "Teamwork", "score": 9, "maxScore": 10, "weightage": 0.4},
        ],
    }
    body.update(extra)
    return body


def test_hr_ping_and_status_are_public(client):
    assert client.get("/api/hr/ping").get_json()["data"] == "pong"
    assert client.get("/api/hr/status").get_json()["data"]["status"] == "UP"


def test_students_cannot_reach_hr_api(client, login):
    assert client.get("/api/hr/document/pending").status_code == 401
    login(Role.STUDENT)
    for path in ("/api/hr/document/pending", "/api/hr/skill/unverified", "/api/hr/performance/pending"):
        assert client.get(path).status_code == 403, path


def test_performance_scored_on_create(hr):
    client, _ = hr
    resp = client.post("/api/hr/performance", json=_evaluation(status="APPROVED"))

    data = resp.get_json()["data"]
    assert resp.status_code == 201
    assert data["overall_score"] == pytest.approx(84.0)
    assert data["grade"] == "A"
    assert data["status"] == "APPROVED"
    assert data["metrics"][0]["metric_name"] == "Coding"


def test_performance_without_metrics_has_no_score(hr):
    client, _ = hr
    data = client.post("/api/hr/performance", json=_evaluation(metrics=[])).get_json()["data"]
    assert data["overall_score"] is None
    assert data["grade"] is None
    assert data["status"] == "DRAFT"


def test_zero_max_score_is_server_error(hr):
    client, _ = hr
    resp = client.post(
        "/api/hr/performance",
        json=_evaluation(metrics=[{"metricName": "Broken", "score": 5, "maxScore": 0, "weightage": 1}]),
    )
    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_bad_metric_is_400(hr):
    client, _ = hr
    resp = client.post("/api/hr/performance", json=_evaluation(metrics=[{"score": "high"}]))
    assert resp.status_code == 400


def test_performance_review_flow(hr):
    client, _ = hr
    pid = client.post("/api/hr/performance", json=_evaluation(status="UNDER_REVIEW")).get_json()["data"]["id"]

    assert [p["id"] for p in client.get("/api/hr/performance/pending").get_json()["data"]] == [pid]

    assert client.put(f"/api/hr/performance/{pid}/approve").get_json()["data"]["status"] == "APPROVED"
    assert client.get("/api/hr/performance/pending").get_json()["count"] == 0
    assert client.get("/api/hr/performance/status/approved").get_json()["count"] == 1
    assert client.put(f"/api/hr/performance/{pid}/reject").get_json()["data"]["status"] == "REJECTED"

    assert client.put("/api/hr/performance/missing/approve").status_code == 404


def test_performance_update_rescores_and_keeps_status(hr):
    client, _ = hr
    pid = client.post("/api/hr/performance", json=_evaluation(status="SUBMITTED")).get_json()["data"]["id"]

    changed = _evaluation(metrics=[{"metricName": "Coding", "score": 45, "maxScore": 100, "weightage": 1}])
    data = client.put(f"/api/hr/performance/{pid}", json=changed).get_json()["data"]

    assert data["overall_score"] == pytest.approx(45.0)
    assert data["grade"] == "D"
    assert data["status"] == "SUBMITTED"


def test_performance_lookups(hr):
    client, _ = hr
    pid = client.post("/api/hr/performance", json=_evaluation()).get_json()["data"]["id"]

    assert client.get("/api/hr/performance/student/s1").get_json()["count"] == 1
    assert client.get("/api/hr/performance/student/s1/latest").get_json()["data"]["id"] == pid
    assert client.get("/api/hr/performance/student/s9/latest").status_code == 404
    assert client.get("/api/hr/performance/evaluator/hr-1").get_json()["count"] == 1

    assert client.delete(f"/api/hr/performance/{pid}").status_code == 200
    assert client.get(f"/api/hr/performance/{pid}").status_code == 404


def test_skill_verified_by_session_user(hr):
    client, user = hr
    resp = client.post(
        "/api/hr/skill",
        json={"studentId": "s1", "skillName": "Python", "category": "programming", "proficiencyLevel": "expert"},
    )
    skill = resp.get_json()["data"]
    assert resp.status_code == 201
    assert skill["verified_by_hr"] is False

    assert client.get("/api/hr/skill/unverified").get_json()["count"] == 1

    verified = client.put(f"/api/hr/skill/{skill['id']}/verify").get_json()["data"]
    assert verified["verified_by_hr"] is True
    assert verified["hr_verifier_id"] == user.id

    assert client.get("/api/hr/skill/student/s1?verified=true").get_json()["count"] == 1
    assert client.get("/api/hr/skill/student/s1?verified=false").get_json()["count"] == 0
    assert client.get("/api/hr/skill/category/PROGRAMMING").get_json()["count"] == 1
    assert client.put("/api/hr/skill/missing/verify").status_code == 404


def test_skill_requires_name(hr):
    client, _ = hr
    resp = client.post("/api/hr/skill", json={"studentId": "s1"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Skill name is required"


def test_document_verify_then_reject(hr):
    client, user = hr
    doc = client.post(
        "/api/hr/document",
        json={"studentId": "s1", "documentName": "Passport", "documentType": "passport", "tags": "travel, id"},
    ).get_json()["data"]
    assert doc["status"] == "PENDING"
    assert doc["tags"] == ["travel", "id"]

    verified = client.put(f"/api/hr/document/{doc['id']}/verify", json={"remarks": "ok"}).get_json()["data"]
    assert verified["status"] == "VERIFIED"
    assert verified["verified"] is True
    assert verified["verified_by_id"] == user.id
    assert verified["verified_by_name"] == "Hr User"

    rejected = client.put(f"/api/hr/document/{doc['id']}/reject?remarks=expired+scan").get_json()["data"]
    assert rejected["status"] == "REJECTED"
    assert rejected["verified"] is False
    assert rejected["verification_remarks"] == "expired scan"

    assert client.put("/api/hr/document/missing/verify").status_code == 404


def test_document_bad_type_is_400(hr):
    client, _ = hr
    resp = client.post("/api/hr/document", json={"studentId": "s1", "documentName": "X", "documentType": "selfie"})
    assert resp.status_code == 400


def test_student_stats_summary(hr, container):
    client, _ = hr
    client.post("/api/hr/performance", json=_evaluation())
    client.post("/api/hr/skill", json={"studentId": "s1", "skillName": "SQL"})
    client.post("/api/hr/document", json={"studentId": "s1", "documentName": "CV"})

    data = client.get("/api/hr/stats/student/s1").get_json()["data"]

    assert data["total_skills"] == 1
    assert data["verified_skills"] == 0
    assert data["total_performances"] == 1
    assert data["latest_overall_score"] == pytest.approx(84.0)
    assert data["latest_grade"] == "A"
    assert data["total_documents"] == 1


def test_document_json_carries_expired_flag(hr):
    client, _ = hr
    old = client.post(
        "/api/hr/document",
        json={"studentId": "s1", "documentName": "Visa", "expiryDate": "2020-01-01T00:00:00+00:00"},
    ).get_json()["data"]
    fresh = client.post(
        "/api/hr/document", json={"studentId": "s1", "documentName": "Passport", "expiryDate": "2999-01-01"}
    ).get_json()["data"]

    assert old["expired"] is True
    assert old["status"] == "PENDING"
    assert fresh["expired"] is False

    resp = client.get("/api/hr/document/expired")
    assert resp.status_code == 200
    assert [d["id"] for d in resp.get_json()["data"]] == [old["id"]]
