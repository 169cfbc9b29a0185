from feedback_board.extensions import db
from feedback_board.models import Comment, Feedback, Upvote


def test_verify_accepts_configured_token(client, admin_headers):
    resp = client.get("/api/admin/verify", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True}


def test_verify_rejects_missing_or_wrong_token(client):
    assert client.get("/api/admin/verify").status_code == 401
    resp = client.get("/api/admin/verify", headers={"x-admin-token": "guess"})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Unauthorized"}


def test_update_status_planned(client, admin_headers, make_feedback):
    item = make_feedback()
    resp = client.put(f"/api/feedback/{item['id']}", json={"status": "Planned"}, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "Planned"
    assert body["title"] == item["title"]
    assert body["upvote_count"] == 0 and body["comment_count"] == 0


def test_update_rejects_unknown_status_and_keeps_stored_value(app, client, admin_headers, make_feedback):
    item = make_feedback()
    resp = client.put(f"/api/feedback/{item['id']}", json={"status": "Bogus"}, headers=admin_headers)
    assert resp.status_code == 400
    assert "Invalid status" in resp.get_json()["error"]
    with app.app_context():
        assert db.session.get(Feedback, item["id"]).status == "Open"


def test_update_applies_only_supplied_fields(client, admin_headers, make_feedback):
    item = make_feedback(title="Old title", description="Old description")
    resp = client.put(
        f"/api/feedback/{item['id']}",
        json={"title": "New title", "status": "In Progress"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["title"] == "New title"
    assert body["description"] == "Old description"
    assert body["status"] == "In Progress"


def test_update_keeps_counts(client, admin_headers, make_feedback):
    item = make_feedback()
    client.post(f"/api/feedback/{item['id']}/upvote", json={"user_email": "v@example.com"})
    client.post(f"/api/feedback/{item['id']}/comments", json={"user_email": "v@example.com", "comment_text": "+1"})
    resp = client.put(f"/api/feedback/{item['id']}", json={"status": "Completed"}, headers=admin_headers)
    body = resp.get_json()
    assert body["upvote_count"] == 1 and body["comment_count"] == 1


def test_update_empty_patch_is_rejected(client, admin_headers, make_feedback):
    item = make_feedback()
    for payload in ({}, {"votes": 10}):
        resp = client.put(f"/api/feedback/{item['id']}", json=payload, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "No fields to update"}


def test_update_rejects_blank_title(client, admin_headers, make_feedback):
    item = make_feedback()
    resp = client.put(f"/api/feedback/{item['id']}", json={"title": "  "}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "title must be a non-empty string"}


def test_update_unknown_id_is_not_found(client, admin_headers):
    resp = client.put("/api/feedback/999", json={"status": "Planned"}, headers=admin_headers)
    assert resp.status_code == 404


def test_update_without_token_changes_nothing(app, client, make_feedback):
    item = make_feedback()
    for headers in ({}, {"x-admin-token": "wrong"}):
        resp = client.put(f"/api/feedback/{item['id']}", json={"status": "Completed"}, headers=headers)
        assert resp.status_code == 401
    with app.app_context():
        assert db.session.get(Feedback, item["id"]).status == "Open"


def test_unauthorized_is_checked_before_validation(client, make_feedback):
    item = make_feedback()
    resp = client.put(f"/api/feedback/{item['id']}", json={"status": "Bogus"})
    assert resp.status_code == 401


def test_delete_removes_item_with_upvotes_and_comments(app, client, admin_headers, make_feedback):
    item = make_feedback()
    keep = make_feedback(title="Keep me")
    client.post(f"/api/feedback/{item['id']}/upvote", json={"user_email": "v@example.com"})
    client.post(f"/api/feedback/{item['id']}/comments", json={"user_email": "v@example.com", "comment_text": "+1"})
    client.post(f"/api/feedback/{keep['id']}/comments", json={"user_email": "v@example.com", "comment_text": "stay"})

    resp = client.delete(f"/api/feedback/{item['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True}

    assert client.get(f"/api/feedback/{item['id']}/comments").get_json() == []
    assert [r["id"] for r in client.get("/api/feedback").get_json()] == [keep["id"]]
    with app.app_context():
        assert Upvote.query.filter_by(feedback_id=item["id"]).count() == 0
        assert Comment.query.filter_by(feedback_id=item["id"]).count() == 0
        assert Comment.query.filter_by(feedback_id=keep["id"]).count() == 1


def test_delete_unknown_id_is_not_found(client, admin_headers):
    resp = client.delete("/api/feedback/12345", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Feedback not found"}


def test_delete_twice_second_is_not_found(client, admin_headers, make_feedback):
    item = make_feedback()
    assert client.delete(f"/api/feedback/{item['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/feedback/{item['id']}", headers=admin_headers).status_code == 404


def test_delete_without_token_changes_nothing(app, client, make_feedback):
    item = make_feedback()
    for headers in ({}, {"x-admin-token": "wrong"}):
        assert client.delete(f"/api/feedback/{item['id']}", headers=headers).status_code == 401
    with app.app_context():
        assert db.session.get(Feedback, item["id"]) is not None
