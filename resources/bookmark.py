'''
----------------------------
Bookmark actions
USER INTERACTIONS
----------------------------
'''

from flask import current_app
from flask.views import MethodView
from flask_smorest import Blueprint, abort
from sqlalchemy.exc import SQLAlchemyError

from db import db
from models import BookmarkModel, ProjectModel
from schemas import BookmarkSchema

blp = Blueprint("bookmarks", __name__, description = "Student bookmarks on projects")


@blp.route("/add-bookmark/<int:project_id>/<int:student_id>")
class AddBookmark(MethodView):
    def post(self, project_id, student_id):
        try:
            project = ProjectModel.query.filter_by(project_id = project_id).first()
            # Checked, not locked: two identical requests at once can both get through
            already_bookmarked = BookmarkModel.query.filter_by(
                student_id = student_id, project_id = project_id
            ).count() > 0
        except SQLAlchemyError:
            current_app.logger.exception("Bookmark lookup failed")
            abort(500, message = "Failed to add bookmark")

        if project is None:
            abort(404, message = "Project not found")
        if already_bookmarked:
            abort(400, message = "Bookmark already added for this project")

        # Snapshot of the project as it is now
        bookmark = BookmarkModel(
            student_id = student_id,
            project_id = project_id,
            title = project.title,
            department_name = project.department_name,
            total_votes = project.total_votes,
        )

        try:
            db.session.add(bookmark)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Adding bookmark for student %s failed", student_id)
            abort(500, message = "Failed to add bookmark")

        return {"message": "Bookmark added successfully", "bookmark_id": bookmark.bookmark_id}, 201


@blp.route("/show-bookmarks/<int:student_id>")
class ShowBookmarks(MethodView):
    @blp.response(200, BookmarkSchema(many = True))
    def get(self, student_id):
        # Shows the live project, bookmarks of deleted projects drop out of the join
        try:
            rows = (
                db.session.query(
                    BookmarkModel.bookmark_id,
                    ProjectModel.project_id,
                    ProjectModel.title,
                    ProjectModel.department_name,
                    ProjectModel.total_votes,
                )
                .join(ProjectModel, BookmarkModel.project_id == ProjectModel.project_id)
                .filter(BookmarkModel.student_id == student_id)
                .order_by(BookmarkModel.bookmark_id)
                .all()
            )
        except SQLAlchemyError:
            current_app.logger.exception("Fetching bookmarks for student %s failed", student_id)
            abort(500, message = "Server error")
        return [row._asdict() for row in rows]


@blp.route("/delete-bookmarks/<int:bookmark_id>")
class DeleteBookmark(MethodView):
    def delete(self, bookmark_id):
        try:
            deleted = BookmarkModel.query.filter_by(bookmark_id = bookmark_id).delete()
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Deleting bookmark %s failed", bookmark_id)
            abort(500, message = "Server error")

        if not deleted:
            abort(404, message = "Bookmark not found")
        return {"message": "Bookmark deleted successfully"}
