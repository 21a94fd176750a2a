# By having it in __init__.py, we can use "from models import StudentModel, ProjectModel"
from models.student import StudentModel
from models.professor import ProfessorModel
from models.project import ProjectModel, APPROVAL_STATUSES
from models.project_student import ProjectStudentModel
from models.comment import CommentModel
from models.bookmark import BookmarkModel
from models.taxonomy import TaxonomyValueModel, DEPARTMENT, GRADUATION_TERM
