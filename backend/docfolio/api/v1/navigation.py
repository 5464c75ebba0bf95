import json
import math
from flask import Response, current_app, jsonify, request, stream_with_context
from docfolio.application.navigation import NavigationFeed, fetch_navigation
from docfolio.context import viewer_context
from . import v1_bp, store

HEARTBEAT_SECONDS = 15
MIN_HEARTBEAT_SECONDS = 1


def _tree_payload(tree, viewer):
    return [node.to_dict(viewer.language) for node in tree]


def heartbeat_seconds():
    """Keep-alive interval from the query string, never below the minimum."""
    value = request.args.get("heartbeat", HEARTBEAT_SECONDS, type=float)
    if value is None or not math.isfinite(value):
        return HEARTBEAT_SECONDS
    return max(value, MIN_HEARTBEAT_SECONDS)


def sse_message(event, payload):
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n"


@v1_bp.route("/navigation", methods=["GET"])
def navigation():
    viewer = viewer_context(store)
    tree = fetch_navigation(store, viewer)
    return jsonify(_tree_payload(tree, viewer))


@v1_bp.route("/navigation/stream", methods=["GET"])
def navigation_stream():
    """
    Server-sent events: the full navigation tree on connect and again
    after every change to the pages table.
    """
    viewer = viewer_context(store)
    heartbeat = heartbeat_seconds()

    @stream_with_context
    def events():
        with NavigationFeed(store, viewer) as feed:
            yield sse_message("navigation", _tree_payload(feed.current_tree(), viewer))
            while True:
                tree = feed.next_tree(timeout=heartbeat)
                if tree is None:
                    yield ": keep-alive\n\n"
                    continue
                current_app.logger.debug("Navigation: pushing refreshed tree")
                yield sse_message("navigation", _tree_payload(tree, viewer))

    return Response(
        events(),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
