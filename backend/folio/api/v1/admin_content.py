# folio/api/v1/admin_content.py
from flask import g, request, jsonify
from folio.application.content.delete_item import delete_content_item
from folio.application.content.list_section import list_section
from folio.application.content.reconcile_section import reconcile_section
from folio.normalizers.content import normalize_section_content
from folio.utils.decorators import admin_required, section_known
from . import v1_bp


# ------------------------
# Section content (admin)
# ------------------------

@v1_bp.route("/admin/content/<section>", methods=["GET"])
@admin_required
@section_known
def admin_get_content(section):
    items = list_section(section_key=section)
    return jsonify(normalize_section_content(section, items, admin=True))


@v1_bp.route("/admin/content/<section>", methods=["PUT"])
@admin_required
@section_known
def admin_replace_content(section):
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or "content" not in data:
        return jsonify({
            "error": "ValidationError",
            "message": "Body must be an object with a content array",
        }), 400

    result = reconcile_section(
        section_key=section,
        raw_items=data["content"],
        actor_id=g.current_user.id,
    )

    body = normalize_section_content(section, result.items, admin=True)
    body["changes"] = result.changes()
    return jsonify(body), 200


@v1_bp.route("/admin/content/items/<int:item_id>", methods=["DELETE"])
@admin_required
def admin_delete_item(item_id):
    try:
        section = delete_content_item(item_id=item_id, actor_id=g.current_user.id)
    except LookupError:
        return jsonify({"error": "Content not found"}), 404

    return jsonify({"message": "Content deleted successfully", "section": section}), 200
