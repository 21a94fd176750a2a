from db import db

class StudentModel(db.Model):
    __tablename__ = "students"

    # Institutional number, given by the client (not generated)
    student_id = db.Column(db.Integer, primary_key = True, autoincrement = False)
    student_name = db.Column(db.String(80), nullable = False)
    # Must end with the university domain
    student_email = db.Column(db.String(120), unique = True, nullable = False)
    # Hashed, never returned
    student_password = db.Column(db.String(256), nullable = False)
    student_department = db.Column(db.String(120))
    # Not a foreign key, stays behind if the project is deleted
    student_project_id = db.Column(db.Integer, nullable = True)
    # Issued on registration, never checked by any route
    student_token = db.Column(db.String(512))
