from db import db

# Canonical approval states, lower case everywhere
APPROVAL_STATUSES = ("pending", "approved", "rejected")

class ProjectModel(db.Model):
    __tablename__ = "projects"

    project_id = db.Column(db.Integer, primary_key = True)
    title = db.Column(db.String(200))
    description = db.Column(db.Text)
    supervisor_name = db.Column(db.String(120))
    graduation_year = db.Column(db.Integer)
    # No database constraint: the register and update request schemas check the value
    # against the active taxonomy rows, so rows holding a removed value are left alone
    graduation_term = db.Column(db.String(80))
    department_name = db.Column(db.String(120))
    # Where the uploaded archive was stored (upload folder + generated name)
    project_file_path = db.Column(db.String(512))
    github_link = db.Column(db.String(512))
    approval_status = db.Column(
        db.Enum(*APPROVAL_STATUSES, name = "approval_status"),
        default = "pending"
    )
    total_votes = db.Column(db.Integer, default = 0)

    # Team membership rows go away with the project
    # Comments and bookmarks only keep the project_id and are not cleaned up
    students = db.relationship(
        "ProjectStudentModel",
        back_populates = "project",
        lazy = "dynamic",
        cascade = "all, delete-orphan"
    )
