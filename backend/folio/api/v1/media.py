# folio/api/v1/media.py
from flask import request, jsonify
from folio.utils.decorators import admin_required
from folio.utils.media import save_file, delete_file, list_files
from folio.utils.audit import log_action
from folio.extensions import db
from . import v1_bp

MAX_FILES_PER_UPLOAD = 10


@v1_bp.route("/admin/images", methods=["GET"])
@admin_required
def list_images():
    return jsonify({"images": list_files()})


@v1_bp.route("/admin/images", methods=["POST"])
@admin_required
def upload_images():
    files = request.files.getlist("images")

    if not files:
        return jsonify({"error": "No files uploaded"}), 400

    if len(files) > MAX_FILES_PER_UPLOAD:
        return jsonify({"error": f"Too many files. Maximum {MAX_FILES_PER_UPLOAD} files allowed."}), 400

    try:
        stored = [
            {"original_name": f.filename, "path": save_file(f)}
            for f in files
        ]
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    log_action(
        action="image.upload",
        entity_type="image",
        entity_id="*",
        payload={"paths": [s["path"] for s in stored]},
    )
    db.session.commit()

    return jsonify({
        "message": f"Successfully uploaded {len(stored)} file(s)",
        "files": stored,
    }), 201


@v1_bp.route("/admin/images/<filename>", methods=["DELETE"])
@admin_required
def delete_image(filename):
    if not delete_file(filename):
        return jsonify({"error": "Image not found"}), 404

    log_action(
        action="image.delete",
        entity_type="image",
        entity_id=filename,
    )
    db.session.commit()

    return jsonify({"message": "Image deleted successfully"}), 200
