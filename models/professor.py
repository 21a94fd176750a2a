from db import db

class ProfessorModel(db.Model):
    __tablename__ = "professors"

    # Client-supplied on /professor-register, generated on /create-professor
    professor_id = db.Column(db.Integer, primary_key = True)
    professor_name = db.Column(db.String(80))
    professor_email = db.Column(db.String(120), unique = True, nullable = False)
    professor_password = db.Column(db.String(256), nullable = False)
    professor_department = db.Column(db.String(120))
    professor_token = db.Column(db.String(512))
