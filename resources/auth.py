'''
----------------------------
Student / professor accounts
USER INTERACTIONS
----------------------------
'''

from flask import current_app
from flask.views import MethodView
# Blueprint divides APIs into smaller segments
from flask_smorest import Blueprint, abort
# Hashes the password that the user enters
# and saves the scrambled password into the database
from passlib.hash import pbkdf2_sha256
# Tokens are handed out but no route checks them
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from db import db
from models import StudentModel, ProfessorModel
from schemas import (
    StudentRegisterSchema,
    StudentLoginSchema,
    StudentSchema,
    ProfessorRegisterSchema,
    ProfessorSchema,
)

blp = Blueprint("auth", __name__, description = "Student and professor registration and login")

# Same message for unknown ID and wrong password
LOGIN_FAILED = "Student ID or password not found!"


def issue_token(identity):
    return create_access_token(identity = str(identity))


@blp.route("/student-register")
class StudentRegister(MethodView):
    @blp.arguments(StudentRegisterSchema, error_status_code = 400)
    @blp.response(201, StudentSchema)
    def post(self, student_data):
        try:
            id_taken = StudentModel.query.filter_by(student_id = student_data["student_id"]).first() is not None
            email_taken = StudentModel.query.filter_by(student_email = student_data["email"]).first() is not None
        except SQLAlchemyError:
            current_app.logger.exception("Student lookup failed during registration")
            abort(500, message = "Server error")

        if id_taken:
            abort(409, message = "Student ID already exists!")
        if email_taken:
            abort(409, message = "Email already exists!")

        student = StudentModel(
            student_id = student_data["student_id"],
            student_name = student_data["student_name"],
            student_email = student_data["email"],
            student_password = pbkdf2_sha256.hash(student_data["password"]),
            student_department = student_data["student_department"],
            student_project_id = None,
            student_token = issue_token(student_data["student_id"]),
        )

        try:
            db.session.add(student)
            db.session.commit()
        # Lost a race with a concurrent registration
        except IntegrityError:
            db.session.rollback()
            abort(409, message = "Duplicate entry for Student ID or Email")
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Registering student %s failed", student_data["student_id"])
            abort(500, message = "Server error")

        current_app.logger.info("Registered student %s", student.student_id)
        return student


@blp.route("/student-login")
class StudentLogin(MethodView):
    @blp.arguments(StudentLoginSchema, error_status_code = 400)
    @blp.response(200, StudentSchema)
    def post(self, login_data):
        try:
            student = StudentModel.query.filter_by(student_id = login_data["student_id"]).first()
        except SQLAlchemyError:
            current_app.logger.exception("Student lookup failed during login")
            abort(500, message = "Server error")

        # student must not be null, and verify must return True
        if not student or not pbkdf2_sha256.verify(login_data["password"], student.student_password):
            abort(404, message = LOGIN_FAILED)

        # Fresh token for the response only, the stored one is untouched
        response = StudentSchema().dump(student)
        response["student_token"] = issue_token(student.student_id)
        return response


@blp.route("/professor-register")
class ProfessorRegister(MethodView):
    @blp.arguments(ProfessorRegisterSchema, error_status_code = 400)
    @blp.response(201, ProfessorSchema)
    def post(self, professor_data):
        # Uniqueness is left to the database
        professor = ProfessorModel(
            professor_id = professor_data["professor_id"],
            professor_name = professor_data["professor_name"],
            professor_email = professor_data["professor_email"],
            professor_password = pbkdf2_sha256.hash(professor_data["password"]),
            professor_department = professor_data["professor_department"],
            professor_token = issue_token(professor_data["professor_id"]),
        )

        try:
            db.session.add(professor)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            abort(409, message = "Duplicate entry for Professor ID or Email")
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Registering professor %s failed", professor_data["professor_id"])
            abort(500, message = "Server error")

        return professor
