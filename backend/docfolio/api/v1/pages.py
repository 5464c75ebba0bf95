from flask import jsonify
from docfolio.application import views
from docfolio.application.cms.portfolio import get_portfolio_content
from docfolio.context import viewer_context
from docfolio.normalizers.page import normalize_page
from docfolio.normalizers.section import normalize_section
from docfolio.normalizers.portfolio import normalize_labels, normalize_portfolio
from . import v1_bp, store


@v1_bp.route("/portfolio", methods=["GET"])
def portfolio():
    viewer = viewer_context(store)
    content, featured = views.landing(store, viewer)
    return jsonify(normalize_portfolio(content, viewer, featured))


@v1_bp.route("/labels", methods=["GET"])
def labels():
    viewer = viewer_context(store)
    return jsonify(normalize_labels(get_portfolio_content(store), viewer))


@v1_bp.route("/docs", methods=["GET"])
def docs():
    viewer = viewer_context(store)
    pages = views.docs_index(store, viewer)
    return jsonify([normalize_page(p, viewer=viewer) for p in pages])


@v1_bp.route("/pages/<slug>", methods=["GET"])
def page_detail(slug):
    viewer = viewer_context(store)
    page, sections = views.page_view(store, viewer, slug)
    return jsonify(normalize_page(page, viewer=viewer, sections=sections))


@v1_bp.route("/pages/<slug>/sections/<section_slug>", methods=["GET"])
def section_detail(slug, section_slug):
    viewer = viewer_context(store)
    page, section = views.section_view(store, viewer, slug, section_slug)
    return jsonify({
        "page": normalize_page(page, viewer=viewer),
        "section": normalize_section(section, viewer=viewer, include_content=True),
    })
