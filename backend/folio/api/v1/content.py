# folio/api/v1/content.py
from flask import jsonify
from folio.application.content.list_section import list_section
from folio.normalizers.content import normalize_section_content
from . import v1_bp


# ------------------------
# Public read
# ------------------------

@v1_bp.route("/content/<section>", methods=["GET"])
def get_section_content(section):
    items = list_section(section_key=section)

    data = normalize_section_content(section, items)
    data["meta"] = {"count": len(items)}
    return jsonify(data)


@v1_bp.route("/content/<section>/<content_type>", methods=["GET"])
def get_section_content_by_type(section, content_type):
    items = list_section(section_key=section, content_type=content_type)

    data = normalize_section_content(section, items)
    data["type"] = content_type
    return jsonify(data)
