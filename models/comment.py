from db import db

class CommentModel(db.Model):
    __tablename__ = "comments"

    comment_id = db.Column(db.Integer, primary_key = True)
    project_id = db.Column(db.Integer, nullable = False, index = True)
    commenter_id = db.Column(db.Integer)
    # Copied from the students table when the comment is written
    commenter_name = db.Column(db.String(80))
    comment_text = db.Column(db.Text)
