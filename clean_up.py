import os
import time

from flask import current_app
from models import ProjectModel

# Delete uploaded files that no project points at
# (left behind when a registration is refused for an already-assigned teammate)
def cleanup_orphaned_files():
    upload_folder = current_app.config["UPLOAD_FOLDER"]
    if not os.path.isdir(upload_folder):
        return []

    # Files newer than this may belong to a registration that hasn't committed yet
    cutoff = time.time() - current_app.config.get("UPLOAD_ORPHAN_GRACE", 3600)

    referenced = {
        os.path.basename(path)
        for (path,) in ProjectModel.query.with_entities(ProjectModel.project_file_path)
        if path
    }

    removed = []
    for name in sorted(os.listdir(upload_folder)):
        path = os.path.join(upload_folder, name)
        if name in referenced or not os.path.isfile(path):
            continue
        try:
            if os.path.getmtime(path) > cutoff:
                continue
            os.remove(path)
            removed.append(name)
        except OSError as e:
            current_app.logger.warning("Could not delete orphaned upload %s: %s", path, e)

    current_app.logger.info("Removed %d orphaned uploads from %s", len(removed), upload_folder)
    return removed
