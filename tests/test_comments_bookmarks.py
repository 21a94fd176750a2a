from models import BookmarkModel, CommentModel
from tests.conftest import student_payload


def test_add_comment_copies_commenter_name(client, app):
    client.post("/student-register", json = student_payload())

    response = client.post("/add-comment/7", json = {"commenter_id": 20201001, "comment_text": "Great idea"})

    assert response.status_code == 201
    comment_id = response.get_json()["comment_id"]
    with app.app_context():
        comment = CommentModel.query.filter_by(comment_id = comment_id).first()
        assert comment.project_id == 7
        assert comment.commenter_name == "Ahmed Hassan Ali"


def test_add_comment_unknown_commenter(client):
    response = client.post("/add-comment/7", json = {"commenter_id": 404, "comment_text": "Who am I"})

    assert response.status_code == 201
    comments = client.get("/show-comments/7").get_json()["comments"]
    assert comments[0]["commenter_name"] is None


def test_show_comments_for_project(client):
    client.post("/add-comment/1", json = {"commenter_id": 1, "comment_text": "first"})
    client.post("/add-comment/1", json = {"commenter_id": 1, "comment_text": "second"})
    client.post("/add-comment/2", json = {"commenter_id": 1, "comment_text": "elsewhere"})

    response = client.get("/show-comments/1")

    assert response.status_code == 200
    assert [c["comment_text"] for c in response.get_json()["comments"]] == ["first", "second"]
    assert client.get("/show-comments/3").get_json() == {"comments": []}


def test_add_comment_validation(client):
    response = client.post("/add-comment/1", json = {"comment_text": "no commenter"})

    assert response.status_code == 400


def test_delete_comment(client):
    comment_id = client.post(
        "/add-comment/1", json = {"commenter_id": 1, "comment_text": "bye"}
    ).get_json()["comment_id"]

    assert client.delete(f"/delete-comment/{comment_id}").status_code == 200
    assert client.delete(f"/delete-comment/{comment_id}").status_code == 404


def test_admin_delete_comment(client):
    comment_id = client.post(
        "/add-comment/1", json = {"commenter_id": 1, "comment_text": "spam"}
    ).get_json()["comment_id"]

    assert client.delete(f"/comments/{comment_id}").status_code == 200
    assert client.delete(f"/comments/{comment_id}").status_code == 404


def test_add_bookmark_once(client, app, register_project):
    project_id = register_project([("Ahmed Hassan", 20201001)]).get_json()["project_id"]

    first = client.post(f"/add-bookmark/{project_id}/20201005")
    second = client.post(f"/add-bookmark/{project_id}/20201005")

    assert first.status_code == 201
    assert second.status_code == 400
    with app.app_context():
        assert BookmarkModel.query.count() == 1


def test_add_bookmark_missing_project(client):
    assert client.post("/add-bookmark/999/20201005").status_code == 404


def test_bookmark_snapshot_is_not_synced(client, app, register_project):
    project_id = register_project([("Ahmed Hassan", 20201001)]).get_json()["project_id"]
    bookmark_id = client.post(f"/add-bookmark/{project_id}/20201005").get_json()["bookmark_id"]

    client.put(f"/projects/{project_id}", json = {"title": "Renamed", "department_name": "IS"})

    with app.app_context():
        bookmark = BookmarkModel.query.filter_by(bookmark_id = bookmark_id).first()
        assert bookmark.title == "Smart Campus"
        assert bookmark.department_name == "CS"
        assert bookmark.total_votes == 0

    # The listing reads the live project
    listing = client.get("/show-bookmarks/20201005").get_json()
    assert listing == [{
        "bookmark_id": bookmark_id,
        "project_id": project_id,
        "title": "Renamed",
        "department_name": "IS",
        "total_votes": 0,
    }]


def test_show_bookmarks_skips_deleted_projects(client, register_project):
    first = register_project([("Ahmed Hassan", 20201001)]).get_json()["project_id"]
    second = register_project([("Sara Mahmoud", 20201002)], title = "Second").get_json()["project_id"]
    client.post(f"/add-bookmark/{first}/20201005")
    client.post(f"/add-bookmark/{second}/20201005")
    client.post(f"/add-bookmark/{second}/20201006")

    client.delete(f"/projects/{first}")

    listing = client.get("/show-bookmarks/20201005").get_json()
    assert [b["title"] for b in listing] == ["Second"]


def test_delete_bookmark(client, register_project):
    project_id = register_project([("Ahmed Hassan", 20201001)]).get_json()["project_id"]
    bookmark_id = client.post(f"/add-bookmark/{project_id}/20201005").get_json()["bookmark_id"]

    assert client.delete(f"/delete-bookmarks/{bookmark_id}").status_code == 200
    assert client.delete(f"/delete-bookmarks/{bookmark_id}").status_code == 404
    assert client.get("/show-bookmarks/20201005").get_json() == []
