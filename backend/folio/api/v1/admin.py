from flask import g, jsonify
from folio.application.content.sections import describe_sections
from folio.utils.decorators import admin_required
from . import v1_bp

@v1_bp.route("/admin/sections", methods=["GET"])
@admin_required
def admin_sections():
    return jsonify({
        "user": {"username": g.current_user.username},
        "sections": describe_sections(),
    })
