'''
----------------------------
Project actions
USER INTERACTIONS
----------------------------
'''

import os
import time
import uuid

from flask import current_app, request
from flask.views import MethodView
from flask_smorest import Blueprint, abort
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from werkzeug.utils import secure_filename

from db import db
from models import ProjectModel, ProjectStudentModel
from schemas import (
    ProjectRegisterSchema,
    ProjectSchema,
    ProjectUpdateSchema,
    ProjectApprovalSchema,
)

# Define the Blueprint for projects
blp = Blueprint("projects", __name__, description = "Operations on graduation projects")

# Multipart field carrying the project archive
FILE_FIELD = "projectFile"


# Stores the uploaded file on disk and returns its storage path
# Name is the upload time in ms plus a short random part, original extension kept
def _save_project_file(file_to_save):
    upload_folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(upload_folder, exist_ok = True)

    safe_original_filename = secure_filename(file_to_save.filename)
    extension = os.path.splitext(safe_original_filename)[1].lower()
    stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{extension}"

    path = os.path.join(upload_folder, stored_name)
    file_to_save.save(path)
    return path


def _inside_upload_folder(path):
    upload_folder = os.path.realpath(current_app.config["UPLOAD_FOLDER"])
    try:
        return os.path.commonpath([upload_folder, os.path.realpath(path)]) == upload_folder
    except ValueError:
        # Different drives on Windows
        return False


# Best effort, a failure is only logged
# Never touches anything outside the upload folder
def _delete_project_file(path):
    if not _inside_upload_folder(path):
        current_app.logger.warning("Refusing to delete %s, not inside the upload folder", path)
        return False
    try:
        os.remove(path)
        return True
    except OSError as e:
        current_app.logger.warning("Could not delete uploaded file %s: %s", path, e)
        return False


def _find_project(project_id):
    try:
        return ProjectModel.query.filter_by(project_id = project_id).first_or_404(
            description = "Project not found"
        )
    except SQLAlchemyError:
        current_app.logger.exception("Fetching project %s failed", project_id)
        abort(500, message = "Error fetching project")


# Student IDs from the list that are already on some project's team
def _assigned_student_ids(student_ids):
    if not student_ids:
        return []
    rows = ProjectStudentModel.query.filter(ProjectStudentModel.student_id.in_(student_ids)).all()
    return [row.student_id for row in rows]


def _insert_teammate(project_id, teammate):
    membership = ProjectStudentModel(
        project_id = project_id,
        student_name = teammate["name"],
        student_id = teammate["student_id"],
    )
    db.session.add(membership)
    # Flushed one at a time so a failing teammate stops the loop right there
    db.session.flush()
    return membership


def _rollback_and_discard(project_file_path):
    try:
        db.session.rollback()
    except SQLAlchemyError as e:
        current_app.logger.warning("Rollback after failed project registration failed: %s", e)
    if project_file_path:
        _delete_project_file(project_file_path)


# --- API endpoints ---

@blp.route("/register-project")
class ProjectRegister(MethodView):
    @blp.arguments(ProjectRegisterSchema, location = "form", error_status_code = 400)
    def post(self, project_data):
        teammates = project_data.pop("teammates")

        file = request.files.get(FILE_FIELD)
        project_file_path = None
        if file and file.filename:
            try:
                project_file_path = _save_project_file(file)
            except OSError:
                current_app.logger.exception("Saving uploaded project file failed")
                abort(500, message = "An error occurred during file upload")

        try:
            already_assigned = _assigned_student_ids([t["student_id"] for t in teammates])
        except SQLAlchemyError:
            current_app.logger.exception("Teammate lookup failed")
            _rollback_and_discard(project_file_path)
            abort(500, message = "Server error during project creation. Transaction has been rolled back.")

        # The uploaded file stays where it is on this path, see `flask cleanup-uploads`
        if already_assigned:
            abort(400, message = "One or more students are already associated with a project")

        try:
            # Status and votes are never taken from the client
            project = ProjectModel(
                approval_status = "pending",
                total_votes = 0,
                project_file_path = project_file_path,
                **project_data
            )
            db.session.add(project)
            db.session.flush()

            for teammate in teammates:
                _insert_teammate(project.project_id, teammate)

            db.session.commit()
        except Exception:
            current_app.logger.exception("Project creation failed, rolling back")
            _rollback_and_discard(project_file_path)
            abort(500, message = "Server error during project creation. Transaction has been rolled back.")

        current_app.logger.info(
            "Registered project %s with %d teammates", project.project_id, len(teammates)
        )
        return {
            "message": "Project and student associations created successfully",
            "project_id": project.project_id,
        }, 201


@blp.route("/projects")
class ProjectList(MethodView):
    # Can return many projects
    @blp.response(200, ProjectSchema(many = True))
    def get(self):
        try:
            return ProjectModel.query.order_by(ProjectModel.project_id).all()
        except SQLAlchemyError:
            current_app.logger.exception("Fetching projects failed")
            abort(500, message = "Error fetching projects")


# Endpoint related to a specific project
@blp.route("/projects/<int:project_id>")
class ProjectResource(MethodView):
    @blp.response(200, ProjectSchema)
    def get(self, project_id):
        return _find_project(project_id)

    # Every field is written, missing ones end up NULL
    @blp.arguments(ProjectUpdateSchema, error_status_code = 400)
    def put(self, project_data, project_id):
        project = _find_project(project_id)

        for field, value in project_data.items():
            setattr(project, field, value)

        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            abort(400, message = "Database integrity error")
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Updating project %s failed", project_id)
            abort(500, message = "Error updating project")

        return {"message": "Project updated successfully"}

    def delete(self, project_id):
        project = _find_project(project_id)
        project_file_path = project.project_file_path

        try:
            # Team rows go with it via cascade
            db.session.delete(project)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Deleting project %s failed", project_id)
            abort(500, message = "Error deleting project")

        if project_file_path and os.path.exists(project_file_path):
            _delete_project_file(project_file_path)

        return {"message": "Project deleted successfully"}


# Admin moderation
@blp.route("/projects/<int:project_id>/approval")
class ProjectApproval(MethodView):
    @blp.arguments(ProjectApprovalSchema, error_status_code = 400)
    @blp.response(200, ProjectSchema)
    def patch(self, approval_data, project_id):
        project = _find_project(project_id)
        project.approval_status = approval_data["approval_status"]

        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Changing approval of project %s failed", project_id)
            abort(500, message = "Error updating project status")

        current_app.logger.info("Project %s is now %s", project_id, project.approval_status)
        return project


# --- Listings by approval status ---

def _projects_with_status(status):
    try:
        return ProjectModel.query.filter_by(approval_status = status).order_by(ProjectModel.project_id).all()
    except SQLAlchemyError:
        current_app.logger.exception("Fetching %s projects failed", status)
        abort(500, message = f"Error fetching {status} projects")


@blp.route("/pending-projects")
class PendingProjects(MethodView):
    @blp.response(200, ProjectSchema(many = True))
    def get(self):
        return _projects_with_status("pending")


@blp.route("/approved-projects")
class ApprovedProjects(MethodView):
    @blp.response(200, ProjectSchema(many = True))
    def get(self):
        return _projects_with_status("approved")


# Older frontend pages still call it "accepted"
@blp.route("/accepted-projects")
class AcceptedProjects(MethodView):
    @blp.response(200, ProjectSchema(many = True))
    def get(self):
        return _projects_with_status("approved")


@blp.route("/rejected-projects")
class RejectedProjects(MethodView):
    @blp.response(200, ProjectSchema(many = True))
    def get(self):
        return _projects_with_status("rejected")
