from models import ProjectModel, StudentModel
from tests.conftest import student_payload


def departments(client):
    response = client.get("/show-departments")
    assert response.status_code == 200
    return response.get_json()["department_names"]


def graduation_terms(client):
    response = client.get("/show-graduation-terms")
    assert response.status_code == 200
    return response.get_json()["graduation_terms"]


def test_seeded_vocabularies(client):
    assert departments(client) == ["CS", "IS"]
    assert graduation_terms(client) == ["First", "Second"]


def test_add_existing_department(client):
    response = client.post("/departments", json = {"department_name": "CS"})

    assert response.status_code == 400
    assert departments(client) == ["CS", "IS"]


def test_delete_unknown_department(client):
    response = client.delete("/departments", json = {"department_name": "Astrology"})

    assert response.status_code == 404
    assert departments(client) == ["CS", "IS"]


def test_delete_department_requires_name(client):
    assert client.delete("/departments", json = {}).status_code == 400


def test_department_round_trip(client):
    original = set(departments(client))

    assert client.post("/departments", json = {"department_name": "Bioinformatics"}).status_code == 200
    assert "Bioinformatics" in departments(client)
    assert client.delete("/departments", json = {"department_name": "Bioinformatics"}).status_code == 200

    assert set(departments(client)) == original


def test_removed_department_can_come_back(client):
    assert client.delete("/departments", json = {"department_name": "IS"}).status_code == 200
    assert client.delete("/departments", json = {"department_name": "IS"}).status_code == 404
    assert client.post("/departments", json = {"department_name": "IS"}).status_code == 200

    assert set(departments(client)) == {"CS", "IS"}


def test_removed_department_stays_on_existing_projects(client, app, register_project):
    project_id = register_project([("Ahmed Hassan", 20201001)], department_name = "IS").get_json()["project_id"]

    client.delete("/departments", json = {"department_name": "IS"})

    with app.app_context():
        assert ProjectModel.query.filter_by(project_id = project_id).first().department_name == "IS"
    # New projects can't use it anymore
    assert register_project([("Sara Mahmoud", 20201002)], department_name = "IS").status_code == 400


def test_graduation_term_round_trip(client):
    assert client.post("/graduation-terms", json = {"graduation_term": "First"}).status_code == 400
    assert client.delete("/graduation-terms", json = {"graduation_term": "Winter"}).status_code == 404

    assert client.post("/graduation-terms", json = {"graduation_term": "Summer"}).status_code == 200
    assert graduation_terms(client) == ["First", "Second", "Summer"]
    assert client.delete("/graduation-terms", json = {"graduation_term": "Summer"}).status_code == 200
    assert graduation_terms(client) == ["First", "Second"]


def test_delete_student(client, app):
    client.post("/student-register", json = student_payload())

    assert client.delete("/delete-student/20201001").status_code == 200
    assert client.delete("/delete-student/20201001").status_code == 404
    with app.app_context():
        assert StudentModel.query.count() == 0


def test_delete_student_keeps_their_comments(client):
    client.post("/student-register", json = student_payload())
    client.post("/add-comment/1", json = {"commenter_id": 20201001, "comment_text": "still here"})

    client.delete("/delete-student/20201001")

    comments = client.get("/show-comments/1").get_json()["comments"]
    assert comments[0]["commenter_name"] == "Ahmed Hassan Ali"


def test_create_professor(client):
    payload = {
        "name": "Dr. Mona Salem",
        "email": "mona@fci.helwan.edu.eg",
        "password": "secret123",
        "department": "CS",
    }

    response = client.post("/create-professor", json = payload)

    assert response.status_code == 201
    data = response.get_json()
    assert data["token"]
    assert data["professor_id"]
    assert "password" not in data

    assert client.post("/create-professor", json = payload).status_code == 409
