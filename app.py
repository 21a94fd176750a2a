import os

import click
from flask import Flask
from flask_smorest import Api
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate

from db import db
from models import TaxonomyValueModel, DEPARTMENT, GRADUATION_TERM

from resources.auth import blp as AuthBlueprint
from resources.project import blp as ProjectBlueprint
from resources.comment import blp as CommentBlueprint
from resources.bookmark import blp as BookmarkBlueprint
from resources.admin import blp as AdminBlueprint

from clean_up import cleanup_orphaned_files

from datetime import timedelta
from flask_cors import CORS


def _csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


# Fills an empty vocabulary from config so a fresh database can take projects
def seed_taxonomies(app):
    seeds = {
        DEPARTMENT: app.config["DEFAULT_DEPARTMENTS"],
        GRADUATION_TERM: app.config["DEFAULT_GRADUATION_TERMS"],
    }
    for kind, values in seeds.items():
        if TaxonomyValueModel.query.filter_by(kind = kind).first():
            continue
        for value in values:
            db.session.add(TaxonomyValueModel(kind = kind, value = value, active = True))
        app.logger.info("Seeded %d %s values", len(values), kind)
    db.session.commit()


def create_app(db_url = None):
    app = Flask(__name__)


    FRONTEND_URL = os.getenv("FRONTEND_URL", "*")

    CORS(
        app,
        resources={r"/*": {
            "origins": [FRONTEND_URL],
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization", "Accept"],
            "expose_headers": ["Content-Type", "Authorization"],
            "max_age": 86400
        }},
    )


    app.config["PROPAGATE_EXCEPTIONS"] = True
    app.config["API_TITLE"] = "Graduation Projects Portal"
    app.config["API_VERSION"] = "v1"
    app.config["OPENAPI_VERSION"] = "3.0.3"
    app.config["OPENAPI_URL_PREFIX"] = "/"
    app.config["OPENAPI_SWAGGER_UI_PATH"] = "/swagger-ui"
    app.config["OPENAPI_SWAGGER_UI_URL"] = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"
    app.config["SQLALCHEMY_DATABASE_URI"] = db_url or os.getenv("DATABASE_URL", "sqlite:///portal.db")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    # Where uploaded project archives are written
    app.config["UPLOAD_FOLDER"] = os.getenv("UPLOAD_FOLDER", "project_files")
    # Seconds an unreferenced upload is left alone by `flask cleanup-uploads`
    app.config["UPLOAD_ORPHAN_GRACE"] = int(os.getenv("UPLOAD_ORPHAN_GRACE", "3600"))
    # Registration only accepts university addresses
    app.config["EMAIL_DOMAIN"] = os.getenv("EMAIL_DOMAIN", "@fci.helwan.edu.eg")
    app.config["DEFAULT_DEPARTMENTS"] = _csv(os.getenv("DEFAULT_DEPARTMENTS", "CS,IS,IT,AI"))
    app.config["DEFAULT_GRADUATION_TERMS"] = _csv(os.getenv("DEFAULT_GRADUATION_TERMS", "First,Second,Summer"))
    # Signs the tokens handed out on register/login (nothing verifies them yet)
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "change-me-in-production-please-0000")
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(hours = 3)

    app.logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    # Connects Flask app to SQLAlchemy
    db.init_app(app)
    api = Api(app)

    # Initialize flask migrate
    migrate = Migrate(app, db)

    # Only used to issue tokens
    jwt = JWTManager(app)

    # Creates all our tables in our database, if tables don't already exist
    # SQLAlchemy knows what to import because we imported "models"
    with app.app_context():
        db.create_all()
        seed_taxonomies(app)

    api.register_blueprint(AuthBlueprint)
    api.register_blueprint(ProjectBlueprint)
    api.register_blueprint(CommentBlueprint)
    api.register_blueprint(BookmarkBlueprint)
    api.register_blueprint(AdminBlueprint)

    # flask cleanup-uploads
    @app.cli.command("cleanup-uploads")
    def cleanup_uploads_command():
        removed = cleanup_orphaned_files()
        click.echo(f"Removed {len(removed)} orphaned upload(s)")

    return app
