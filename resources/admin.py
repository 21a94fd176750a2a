'''
----------------------------
Admin page: vocabularies, accounts, moderation
ADMIN INTERACTIONS
----------------------------
'''

from flask import current_app
from flask.views import MethodView
from flask_smorest import Blueprint, abort
from passlib.hash import pbkdf2_sha256
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from db import db
from models import ProfessorModel, StudentModel, TaxonomyValueModel, DEPARTMENT, GRADUATION_TERM
from resources.auth import issue_token
from resources.comment import delete_comment
from schemas import DepartmentSchema, GraduationTermSchema, ProfessorCreateSchema

blp = Blueprint("admin", __name__, description = "Administrative operations")


# --- Controlled vocabularies (departments, graduation terms) ---

def _add_value(kind, value, label):
    try:
        row = TaxonomyValueModel.query.filter_by(kind = kind, value = value).first()
    except SQLAlchemyError:
        current_app.logger.exception("Reading %s values failed", kind)
        abort(500, message = f"Error retrieving {label}s")

    if row is not None and row.active:
        abort(400, message = f"{label.capitalize()} already exists")

    try:
        if row is None:
            db.session.add(TaxonomyValueModel(kind = kind, value = value, active = True))
        else:
            # Previously removed, bring the same row back
            row.active = True
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Adding %s '%s' failed", kind, value)
        abort(500, message = f"Error adding new {label}")

    current_app.logger.info("Added %s '%s'", kind, value)
    return {"message": f"New {label} added successfully"}


def _remove_value(kind, value, label):
    try:
        row = TaxonomyValueModel.query.filter_by(kind = kind, value = value, active = True).first()
    except SQLAlchemyError:
        current_app.logger.exception("Reading %s values failed", kind)
        abort(500, message = f"Error retrieving {label}s")

    if row is None:
        abort(404, message = f"{label.capitalize()} not found")

    # Projects already holding the value keep it
    try:
        row.active = False
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Removing %s '%s' failed", kind, value)
        abort(500, message = f"Error deleting {label}")

    current_app.logger.info("Removed %s '%s'", kind, value)
    return {"message": f"{label.capitalize()} deleted successfully"}


def _list_values(kind, label):
    try:
        return TaxonomyValueModel.active_values(kind)
    except SQLAlchemyError:
        current_app.logger.exception("Reading %s values failed", kind)
        abort(500, message = f"Error retrieving {label}s")


@blp.route("/departments")
class Departments(MethodView):
    @blp.arguments(DepartmentSchema, error_status_code = 400)
    def post(self, department_data):
        return _add_value(DEPARTMENT, department_data["department_name"], "department")

    @blp.arguments(DepartmentSchema, error_status_code = 400)
    def delete(self, department_data):
        return _remove_value(DEPARTMENT, department_data["department_name"], "department")


@blp.route("/show-departments")
class ShowDepartments(MethodView):
    def get(self):
        return {"department_names": _list_values(DEPARTMENT, "department")}


@blp.route("/graduation-terms")
class GraduationTerms(MethodView):
    @blp.arguments(GraduationTermSchema, error_status_code = 400)
    def post(self, term_data):
        return _add_value(GRADUATION_TERM, term_data["graduation_term"], "graduation term")

    @blp.arguments(GraduationTermSchema, error_status_code = 400)
    def delete(self, term_data):
        return _remove_value(GRADUATION_TERM, term_data["graduation_term"], "graduation term")


@blp.route("/show-graduation-terms")
class ShowGraduationTerms(MethodView):
    def get(self):
        return {"graduation_terms": _list_values(GRADUATION_TERM, "graduation term")}


# --- Accounts ---

@blp.route("/create-professor")
class CreateProfessor(MethodView):
    @blp.arguments(ProfessorCreateSchema, error_status_code = 400)
    def post(self, professor_data):
        professor = ProfessorModel(
            professor_name = professor_data["name"],
            professor_email = professor_data["email"],
            professor_password = pbkdf2_sha256.hash(professor_data["password"]),
            professor_department = professor_data["department"],
        )

        try:
            db.session.add(professor)
            # Need the generated ID before the token can be issued
            db.session.flush()
            professor.professor_token = issue_token(professor.professor_id)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            abort(409, message = "Duplicate entry for Professor Email")
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Creating professor failed")
            abort(500, message = "Server error while creating professor")

        return {
            "message": "Professor created successfully",
            "professor_id": professor.professor_id,
            "token": professor.professor_token,
        }, 201


@blp.route("/delete-student/<int:student_id>")
class DeleteStudent(MethodView):
    def delete(self, student_id):
        # Comments, bookmarks and team rows pointing at this student are left alone
        try:
            deleted = StudentModel.query.filter_by(student_id = student_id).delete()
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Deleting student %s failed", student_id)
            abort(500, message = "Error deleting student account")

        if not deleted:
            abort(404, message = "Student account not found")
        return {"message": "Student account deleted successfully"}


@blp.route("/comments/<int:comment_id>")
class AdminComment(MethodView):
    def delete(self, comment_id):
        return delete_comment(comment_id)
