'''
----------------------------
Comment actions
USER INTERACTIONS
----------------------------
'''

from flask import current_app
from flask.views import MethodView
from flask_smorest import Blueprint, abort
from sqlalchemy.exc import SQLAlchemyError

from db import db
from models import CommentModel, StudentModel
from schemas import CommentCreateSchema, CommentListSchema

blp = Blueprint("comments", __name__, description = "Comments on projects")


def delete_comment(comment_id):
    # Shared with the admin page
    try:
        deleted = CommentModel.query.filter_by(comment_id = comment_id).delete()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Deleting comment %s failed", comment_id)
        abort(500, message = "Error deleting comment")

    if not deleted:
        abort(404, message = "Comment not found")
    return {"message": "Comment deleted successfully"}


@blp.route("/add-comment/<int:project_id>")
class AddComment(MethodView):
    @blp.arguments(CommentCreateSchema, error_status_code = 400)
    def post(self, comment_data, project_id):
        try:
            # Unknown commenter is not an error, the name is just left empty
            student = StudentModel.query.filter_by(student_id = comment_data["commenter_id"]).first()
            comment = CommentModel(
                project_id = project_id,
                commenter_id = comment_data["commenter_id"],
                commenter_name = student.student_name if student else None,
                comment_text = comment_data["comment_text"],
            )
            db.session.add(comment)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Adding comment to project %s failed", project_id)
            abort(500, message = "Server error while adding comment")

        return {"message": "Comment added successfully", "comment_id": comment.comment_id}, 201


@blp.route("/show-comments/<int:project_id>")
class ShowComments(MethodView):
    @blp.response(200, CommentListSchema)
    def get(self, project_id):
        try:
            comments = CommentModel.query.filter_by(project_id = project_id).order_by(CommentModel.comment_id).all()
        except SQLAlchemyError:
            current_app.logger.exception("Fetching comments for project %s failed", project_id)
            abort(500, message = "Server error")
        return {"comments": comments}


@blp.route("/delete-comment/<int:comment_id>")
class DeleteComment(MethodView):
    def delete(self, comment_id):
        return delete_comment(comment_id)
