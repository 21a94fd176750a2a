from db import db

class ProjectStudentModel(db.Model):
    __tablename__ = "project_students"

    id = db.Column(db.Integer, primary_key = True)
    project_id = db.Column(db.Integer, db.ForeignKey("projects.project_id"), nullable = False)
    # Display name as typed by the submitter, not looked up
    student_name = db.Column(db.String(80))
    # No unique constraint: one project per student is only pre-checked by the handler
    student_id = db.Column(db.Integer, nullable = False, index = True)

    project = db.relationship("ProjectModel", back_populates = "students")
