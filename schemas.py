import json

from flask import current_app
from flask_smorest import abort
from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_dump, validate, validates
from sqlalchemy.exc import SQLAlchemyError

from models import APPROVAL_STATUSES, DEPARTMENT, GRADUATION_TERM, TaxonomyValueModel


# Shared rules for everything the client sends
class InputSchema(Schema):
    class Meta:
        # Ignore extra keys instead of failing the whole request
        unknown = EXCLUDE


def _check_email_domain(value):
    domain = current_app.config["EMAIL_DOMAIN"]
    if not value.endswith(domain):
        raise ValidationError(f"Email domain must be '{domain}'")


def _check_taxonomy(kind, value, label):
    # Omitted on a full update, stored as NULL
    if value is None:
        return
    try:
        active = TaxonomyValueModel.is_active(kind, value)
    except SQLAlchemyError:
        current_app.logger.exception("Reading %s values failed", kind)
        abort(500, message = f"Error retrieving {label}s")
    if not active:
        raise ValidationError(f"Unknown {label} '{value}'")


# --- Auth: students ---

class StudentRegisterSchema(InputSchema):
    student_id = fields.Int(required = True)
    student_name = fields.Str(required = True, validate = validate.Length(min = 10, max = 20))
    email = fields.Email(required = True)
    # Password is load_only, so it's never dumped.
    password = fields.Str(required = True, load_only = True, validate = validate.Length(min = 8, max = 12))
    student_department = fields.Str(required = True)

    @validates("email")
    def validate_email(self, value, **kwargs):
        _check_email_domain(value)


class StudentLoginSchema(InputSchema):
    student_id = fields.Int(required = True)
    password = fields.Str(required = True, load_only = True, validate = validate.Length(min = 8, max = 12))


# What gets echoed back, no password column here
class StudentSchema(Schema):
    student_id = fields.Int()
    student_name = fields.Str()
    student_email = fields.Str()
    student_department = fields.Str(allow_none = True)
    student_project_id = fields.Int(allow_none = True)
    student_token = fields.Str(allow_none = True)


# --- Auth: professors ---

class ProfessorRegisterSchema(InputSchema):
    professor_id = fields.Int(required = True)
    professor_name = fields.Str(required = True)
    professor_email = fields.Email(required = True)
    password = fields.Str(required = True, load_only = True, validate = validate.Length(min = 8, max = 12))
    professor_department = fields.Str(required = True)

    @validates("professor_email")
    def validate_professor_email(self, value, **kwargs):
        _check_email_domain(value)


# Admin shortcut, professor ID is generated
class ProfessorCreateSchema(InputSchema):
    name = fields.Str(required = True)
    email = fields.Email(required = True)
    password = fields.Str(required = True, load_only = True, validate = validate.Length(min = 1))
    department = fields.Str(required = True)


class ProfessorSchema(Schema):
    professor_id = fields.Int()
    professor_name = fields.Str(allow_none = True)
    professor_email = fields.Str()
    professor_department = fields.Str(allow_none = True)
    professor_token = fields.Str(allow_none = True)


# --- Projects ---

class TeammateSchema(InputSchema):
    name = fields.Str(required = True, validate = validate.Length(min = 1))
    # Frontend sends camelCase here
    student_id = fields.Int(required = True, data_key = "studentId")


class TeammateList(fields.Field):
    """Form field holding a JSON array of teammates.

    Multipart forms can't nest objects, so the client sends
    ``teammateData='[{"name": "...", "studentId": 1}]'``.
    A list (JSON body, tests) is accepted as is.
    """

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, (str, bytes)):
            try:
                value = json.loads(value)
            except ValueError as e:
                raise ValidationError("Teammate data must be a JSON array") from e
        if not isinstance(value, list):
            raise ValidationError("Teammate data must be a JSON array")
        return TeammateSchema(many = True).load(value)


class ProjectRegisterSchema(InputSchema):
    title = fields.Str(required = True, validate = validate.Length(min = 1, max = 200))
    description = fields.Str(required = True)
    supervisor_name = fields.Str(required = True)
    graduation_year = fields.Int(required = True)
    graduation_term = fields.Str(required = True)
    department_name = fields.Str(required = True)
    github_link = fields.Str(allow_none = True, load_default = None)
    teammates = TeammateList(data_key = "teammateData", load_default = list)

    @validates("graduation_term")
    def validate_graduation_term(self, value, **kwargs):
        _check_taxonomy(GRADUATION_TERM, value, "graduation term")

    @validates("department_name")
    def validate_department_name(self, value, **kwargs):
        _check_taxonomy(DEPARTMENT, value, "department")


# Fixed projection used by every project listing
class ProjectSchema(Schema):
    project_id = fields.Int()
    title = fields.Str(allow_none = True)
    description = fields.Str(allow_none = True)
    supervisor_name = fields.Str(allow_none = True)
    graduation_year = fields.Int(allow_none = True)
    graduation_term = fields.Str(allow_none = True)
    department_name = fields.Str(allow_none = True)
    project_file_path = fields.Str(allow_none = True)
    github_link = fields.Str(allow_none = True)
    approval_status = fields.Str(allow_none = True)
    total_votes = fields.Int(allow_none = True)

    @post_dump
    def fill_defaults(self, data, **kwargs):
        if data.get("approval_status") is None:
            data["approval_status"] = "pending"
        if data.get("total_votes") is None:
            data["total_votes"] = 0
        return data


# Full overwrite: anything left out becomes NULL
# The stored file path is owned by the server and not accepted here
class ProjectUpdateSchema(InputSchema):
    title = fields.Str(allow_none = True, load_default = None)
    description = fields.Str(allow_none = True, load_default = None)
    supervisor_name = fields.Str(allow_none = True, load_default = None)
    graduation_year = fields.Int(allow_none = True, load_default = None)
    graduation_term = fields.Str(allow_none = True, load_default = None)
    department_name = fields.Str(allow_none = True, load_default = None)
    github_link = fields.Str(allow_none = True, load_default = None)

    @validates("graduation_term")
    def validate_graduation_term(self, value, **kwargs):
        _check_taxonomy(GRADUATION_TERM, value, "graduation term")

    @validates("department_name")
    def validate_department_name(self, value, **kwargs):
        _check_taxonomy(DEPARTMENT, value, "department")


class ProjectApprovalSchema(InputSchema):
    approval_status = fields.Str(required = True, validate = validate.OneOf(APPROVAL_STATUSES))


# --- Comments and bookmarks ---

class CommentCreateSchema(InputSchema):
    commenter_id = fields.Int(required = True)
    comment_text = fields.Str(required = True, validate = validate.Length(min = 1))


class CommentSchema(Schema):
    comment_id = fields.Int()
    project_id = fields.Int()
    commenter_id = fields.Int(allow_none = True)
    commenter_name = fields.Str(allow_none = True)
    comment_text = fields.Str(allow_none = True)


class CommentListSchema(Schema):
    comments = fields.List(fields.Nested(CommentSchema()))


# Listing row: bookmark id plus the live project columns
class BookmarkSchema(Schema):
    bookmark_id = fields.Int()
    project_id = fields.Int()
    title = fields.Str(allow_none = True)
    department_name = fields.Str(allow_none = True)
    total_votes = fields.Int(allow_none = True)


# --- Admin taxonomy ---

class DepartmentSchema(InputSchema):
    department_name = fields.Str(required = True, validate = validate.Length(min = 1, max = 120))


class GraduationTermSchema(InputSchema):
    graduation_term = fields.Str(required = True, validate = validate.Length(min = 1, max = 80))
