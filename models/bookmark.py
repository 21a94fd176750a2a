from db import db

class BookmarkModel(db.Model):
    __tablename__ = "bookmarks"

    bookmark_id = db.Column(db.Integer, primary_key = True)
    student_id = db.Column(db.Integer, nullable = False, index = True)
    project_id = db.Column(db.Integer, nullable = False)
    # Snapshot of the project at bookmark time, not kept in sync
    title = db.Column(db.String(200))
    department_name = db.Column(db.String(120))
    total_votes = db.Column(db.Integer)
