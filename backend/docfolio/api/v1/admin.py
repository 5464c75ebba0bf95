# docfolio/api/v1/admin.py
from flask import jsonify, request
from docfolio.application.cms.create_page import create_page as create_page_service
from docfolio.application.cms.update_page import update_page as update_page_service
from docfolio.application.cms.delete_page import delete_page as delete_page_service
from docfolio.application.cms.parents import parent_options
from docfolio.application.cms import sections as section_service
from docfolio.application.cms.portfolio import get_portfolio_content, save_portfolio_content
from docfolio.content_store import storage
from docfolio.normalizers.page import normalize_page
from docfolio.normalizers.section import normalize_section
from docfolio.normalizers.portfolio import normalize_portfolio_admin
from docfolio.utils.decorators import admin_required
from werkzeug.exceptions import NotFound
from . import v1_bp, store


def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _option(page):
    return {"id": page.id, "title": page.title, "slug": page.slug, "parent_id": page.parent_id}

# ------------------------
# Pages
# ------------------------

@v1_bp.route("/admin/pages", methods=["GET"])
@admin_required
def list_pages():
    pages = store.select("pages", order=["order", "-created_at"])
    return jsonify([normalize_page(p, admin=True) for p in pages])


@v1_bp.route("/admin/pages", methods=["POST"])
@admin_required
def create_page():
    data = _payload()
    if data is None:
        return jsonify({"error": "Invalid request body"}), 400

    page = create_page_service(store, data=data)
    return jsonify({
        "id": page.id,
        "slug": page.slug,
        "message": "Page created successfully"
    }), 201


@v1_bp.route("/admin/pages/<page_id>", methods=["GET"])
@admin_required
def get_page(page_id):
    page = store.single("pages", eq={"id": page_id})
    if not page:
        raise NotFound("Page not found")

    sections = section_service.list_sections(store, page.id)
    return jsonify(normalize_page(page, admin=True, sections=sections))


@v1_bp.route("/admin/pages/<page_id>", methods=["PUT"])
@admin_required
def update_page(page_id):
    data = _payload()
    if data is None:
        return jsonify({"error": "Invalid request body"}), 400

    page = update_page_service(store, page_id=page_id, data=data)
    return jsonify({
        "id": page.id,
        "message": "Page updated successfully"
    }), 200


@v1_bp.route("/admin/pages/<page_id>", methods=["DELETE"])
@admin_required
def delete_page(page_id):
    deleted = delete_page_service(store, page_id=page_id)
    return jsonify({
        "deleted": deleted,
        "message": "Page and subpages deleted successfully"
    }), 200


@v1_bp.route("/admin/parent-options", methods=["GET"])
@v1_bp.route("/admin/pages/<page_id>/parent-options", methods=["GET"])
@admin_required
def list_parent_options(page_id=None):
    return jsonify([_option(p) for p in parent_options(store, page_id=page_id)])

# ------------------------
# Sections
# ------------------------

@v1_bp.route("/admin/pages/<page_id>/sections", methods=["GET"])
@admin_required
def list_sections(page_id):
    sections = section_service.list_sections(store, page_id)
    return jsonify([normalize_section(s, admin=True) for s in sections])


@v1_bp.route("/admin/pages/<page_id>/sections", methods=["POST"])
@admin_required
def create_section(page_id):
    data = _payload()
    if data is None:
        return jsonify({"error": "Invalid request body"}), 400

    section = section_service.create_section(store, page_id=page_id, data=data)
    return jsonify({
        "id": section.id,
        "slug": section.slug,
        "order": section.order,
        "message": "Section created successfully"
    }), 201


@v1_bp.route("/admin/sections/<section_id>", methods=["GET"])
@admin_required
def get_section(section_id):
    section = section_service.get_section(store, section_id)
    return jsonify(normalize_section(section, admin=True, include_content=True))


@v1_bp.route("/admin/sections/<section_id>", methods=["PUT"])
@admin_required
def update_section(section_id):
    data = _payload()
    if data is None:
        return jsonify({"error": "Invalid request body"}), 400

    section = section_service.update_section(store, section_id=section_id, data=data)
    return jsonify({
        "id": section.id,
        "message": "Section updated successfully"
    }), 200


@v1_bp.route("/admin/sections/<section_id>", methods=["DELETE"])
@admin_required
def delete_section(section_id):
    section_service.delete_section(store, section_id=section_id)
    return jsonify({"message": "Section deleted successfully"}), 200

# ------------------------
# Portfolio content
# ------------------------

@v1_bp.route("/admin/portfolio", methods=["GET"])
@admin_required
def get_portfolio():
    return jsonify(normalize_portfolio_admin(get_portfolio_content(store)))


@v1_bp.route("/admin/portfolio", methods=["PUT"])
@admin_required
def save_portfolio():
    data = _payload()
    if data is None:
        return jsonify({"error": "Invalid request body"}), 400

    content = save_portfolio_content(store, data=data)
    return jsonify(normalize_portfolio_admin(content)), 200

# ------------------------
# Uploads
# ------------------------

@v1_bp.route("/admin/uploads", methods=["POST"])
@admin_required
def upload_image():
    if "file" not in request.files:
        return jsonify({"error": "File is required"}), 400

    path = storage.upload(request.files["file"])
    return jsonify({
        "path": path,
        "url": storage.public_url(path)
    }), 201
