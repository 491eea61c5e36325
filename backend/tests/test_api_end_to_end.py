"""
End-to-end flow over HTTP: owner rates and shares, collaborator gives
feedback and submits, owner reads it back.
"""

import pytest


def _rate_everything(client, owner, role_id, competency_ids, notes="solid work"):
    for cid in competency_ids:
        r = client.put(
            f"/api/responses/{role_id}/{cid}",
            json={"assessment_level": 3, "notes": notes},
            headers=owner.headers,
        )
        assert r.status_code == 200, r.text
        assert r.json()["persisted"] is True


def _share(client, owner, collaborator_email="collab@example.com", role_id=1):
    return client.post(
        "/api/shares",
        json={"role_id": role_id, "collaborator_email": collaborator_email},
        headers=owner.headers,
    )


@pytest.fixture
def shared(client, owner, enqueue):
    _rate_everything(client, owner, 1, [101, 102, 103, 104])
    r = _share(client, owner)
    assert r.status_code == 201, r.text
    return r.json()


def test_requests_without_a_session_are_rejected(client):
    assert client.get("/api/responses/1").status_code == 401
    r = client.get("/api/shares/mine", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"


def test_reference_routes(client):
    roles = client.get("/api/reference/roles").json()
    assert [r["role_id"] for r in roles] == [1, 2, 3]
    assert client.get("/api/reference/roles/999/competencies").status_code == 404


def test_load_responses_reports_progress(client, owner):
    _rate_everything(client, owner, 1, [101, 103])

    body = client.get("/api/responses/1", headers=owner.headers).json()
    assert set(body["responses"]) == {"101", "103"}
    assert body["progress"]["completed_count"] == 2
    assert body["progress"]["total"] == 4
    assert body["progress"]["is_fully_complete"] is False


def test_rating_validation(client, owner):
    assert client.put("/api/responses/1/999", json={"assessment_level": 3}, headers=owner.headers).status_code == 404
    assert client.put("/api/responses/1/101", json={"assessment_level": 9}, headers=owner.headers).status_code == 422


def test_incomplete_assessment_cannot_be_shared(client, owner):
    _rate_everything(client, owner, 1, [101, 102, 103])

    r = _share(client, owner)
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "ASSESSMENT_INCOMPLETE"


def test_invalid_collaborator_email(client, owner):
    _rate_everything(client, owner, 1, [101, 102, 103, 104])
    assert _share(client, owner, collaborator_email="not-an-email").status_code == 422


def test_full_share_and_feedback_flow(client, owner, collaborator, enqueue, shared):
    token = shared["share_token"]
    assert shared["share_link"] == f"https://idp.test/collaborate/{token}"
    assert enqueue.calls[0][0]["collaboratorEmail"] == "collab@example.com"

    mine = client.get("/api/shares/mine", headers=owner.headers).json()
    assert [s["id"] for s in mine] == [shared["share_id"]]
    assert mine[0]["role_name"] == "Software Engineer"

    for_me = client.get("/api/shares/for-me", headers=collaborator.headers).json()
    assert [s["share_token"] for s in for_me] == [token]

    opened = client.get(f"/api/collaborate/{token}", headers=collaborator.headers).json()
    assert set(opened["snapshots"]) == {"101", "102", "103", "104"}
    assert opened["feedback"] == {}
    assert opened["read_only"] is False

    # premature submit
    r = client.post(f"/api/collaborate/{token}/submit", headers=collaborator.headers)
    assert r.status_code == 422

    for cid in (101, 102, 103, 104):
        r = client.put(
            f"/api/collaborate/{token}/feedback/{cid}",
            json={"collaborator_assessment_level": 4, "collaborator_notes": f"feedback {cid}"},
            headers=collaborator.headers,
        )
        assert r.status_code == 200, r.text

    r = client.post(f"/api/collaborate/{token}/submit", headers=collaborator.headers)
    assert r.status_code == 200
    assert r.json()["feedback_submitted"] is True

    details = client.get(f"/api/shares/{shared['share_id']}", headers=owner.headers).json()
    assert details["share"]["feedback_submitted"] is True
    assert details["read_only"] is True
    assert details["feedback"]["103"]["collaborator_notes"] == "feedback 103"
    assert details["progress"]["is_fully_complete"] is True

    # submitted feedback is frozen
    r = client.put(
        f"/api/collaborate/{token}/feedback/101",
        json={"collaborator_assessment_level": 1},
        headers=collaborator.headers,
    )
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "FEEDBACK_SUBMITTED"

    # submission happens exactly once
    first_submitted_at = details["share"]["feedback_submitted_at"]
    r = client.post(f"/api/collaborate/{token}/submit", headers=collaborator.headers)
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "FEEDBACK_SUBMITTED"

    mine = client.get("/api/shares/mine", headers=owner.headers).json()
    assert mine[0]["feedback_submitted"] is True
    assert mine[0]["feedback_submitted_at"] is not None
    assert mine[0]["feedback_submitted_at"] == first_submitted_at


def test_snapshot_survives_later_edits(client, owner, collaborator, shared):
    client.put("/api/responses/1/101", json={"assessment_level": 5, "notes": "changed"}, headers=owner.headers)

    opened = client.get(f"/api/collaborate/{shared['share_token']}", headers=collaborator.headers).json()
    assert opened["snapshots"]["101"]["assessment_level"] == 3
    assert opened["snapshots"]["101"]["notes"] == "solid work"


def test_duplicate_share_is_rejected(client, owner, shared):
    r = _share(client, owner, collaborator_email="COLLAB@example.com")

    assert r.status_code == 409
    assert r.json()["error"]["code"] == "DUPLICATE_SHARE"
    assert "identical assessment" in r.json()["error"]["message"]


def test_only_the_addressed_collaborator_can_use_the_link(client, owner, stranger, shared):
    token = shared["share_token"]

    r = client.get(f"/api/collaborate/{token}", headers=stranger.headers)
    assert r.status_code == 403
    assert r.json()["error"]["message"] == "You don't have permission to access this share"

    # the owner cannot give feedback on their own share either
    assert client.get(f"/api/collaborate/{token}", headers=owner.headers).status_code == 403
    assert client.get("/api/collaborate/unknown-token", headers=stranger.headers).status_code == 404


def test_share_details_visibility(client, collaborator, stranger, shared):
    url = f"/api/shares/{shared['share_id']}"
    assert client.get(url, headers=collaborator.headers).status_code == 200
    assert client.get(url, headers=stranger.headers).status_code == 403


def test_delete_blocked_once_feedback_started(client, owner, collaborator, shared):
    token = shared["share_token"]
    client.put(
        f"/api/collaborate/{token}/feedback/102",
        json={"collaborator_notes": "started"},
        headers=collaborator.headers,
    )

    r = client.delete(f"/api/shares/{shared['share_id']}", headers=owner.headers)
    assert r.status_code == 409
    assert r.json()["error"]["message"] == "collab@example.com has already started providing feedback."


def test_delete_share_cascades(client, owner, collaborator, stranger, shared):
    url = f"/api/shares/{shared['share_id']}"
    assert client.delete(url, headers=stranger.headers).status_code == 403

    assert client.delete(url, headers=owner.headers).status_code == 204
    assert client.get(url, headers=owner.headers).status_code == 404
    assert client.get(f"/api/collaborate/{shared['share_token']}", headers=collaborator.headers).status_code == 404
    assert client.get("/api/shares/mine", headers=owner.headers).json() == []


def test_csv_export(client, owner):
    client.put("/api/responses/1/101", json={"assessment_level": 2, "notes": "a\nb"}, headers=owner.headers)

    r = client.get("/api/responses/1/export.csv", headers=owner.headers)

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert r.headers["content-disposition"].endswith('_idp_owner@example.com.csv"')
    lines = r.text.split("\n")
    assert lines[0] == '"Role","Core Competency","Competency","Assessment","Notes"'
    assert lines[1].endswith('"2 - Developing","a b"')
    assert len(lines) == 5


def test_migrate_endpoint_replays_cache(client, owner, cache):
    from idp.schemas.response import ResponseData

    cache.put(owner.email, 1, 104, ResponseData(assessment_level=4, notes="offline edit"))

    r = client.post("/api/responses/migrate", headers=owner.headers)
    assert r.json() == {"migrated": True}

    body = client.get("/api/responses/1", headers=owner.headers).json()
    assert body["responses"]["104"] == {"assessment_level": 4, "notes": "offline edit"}


def test_malformed_body_uses_error_envelope(client, owner):
    r = client.post("/api/shares", json={"role_id": "abc"}, headers=owner.headers)

    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "VALIDATION_ERROR"
    assert "body.role_id" in err["details"]["fields"]
    assert "body.collaborator_email" in err["details"]["fields"]
