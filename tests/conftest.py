"""
Test configuration and fixtures
"""
import io
import json

import pytest

from app import create_app
from db import db


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(tmp_path, upload_dir, monkeypatch):
    """Fresh app on its own SQLite file for each test"""
    monkeypatch.setenv("UPLOAD_FOLDER", str(upload_dir))
    monkeypatch.setenv("JWT_SECRET_KEY", "test-jwt-secret-key-for-testing-only")
    monkeypatch.setenv("DEFAULT_DEPARTMENTS", "CS,IS")
    monkeypatch.setenv("DEFAULT_GRADUATION_TERMS", "First,Second")

    app = create_app(f"sqlite:///{(tmp_path / 'test.db').as_posix()}")
    app.config["TESTING"] = True

    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def student_payload(student_id = 20201001, **overrides):
    data = {
        "student_id": student_id,
        "student_name": "Ahmed Hassan Ali",
        "email": f"s{student_id}@fci.helwan.edu.eg",
        "password": "secret123",
        "student_department": "CS",
    }
    data.update(overrides)
    return data


def project_form(teammates = (), with_file = True, **overrides):
    data = {
        "title": "Smart Campus",
        "description": "Indoor navigation for the faculty building",
        "supervisor_name": "Dr. Mona Salem",
        "graduation_year": "2024",
        "graduation_term": "First",
        "department_name": "CS",
        "github_link": "https://github.com/example/smart-campus",
        "teammateData": json.dumps(
            [{"name": name, "studentId": student_id} for name, student_id in teammates]
        ),
    }
    if with_file:
        data["projectFile"] = (io.BytesIO(b"PK\x03\x04 project archive"), "smart campus.zip")
    data.update(overrides)
    return data


@pytest.fixture
def register_project(client):
    """Posts a project registration, returns the response"""
    def _register(teammates = (), with_file = True, **overrides):
        return client.post(
            "/register-project",
            data = project_form(teammates, with_file, **overrides),
            content_type = "multipart/form-data",
        )
    return _register
