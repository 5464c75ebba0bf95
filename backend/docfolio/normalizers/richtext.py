from docfolio.domain import richtext


def normalize_richtext(raw):
    """
    Persisted rich text -> {"doc": <json tree>, "html": <rendered>, "text": <plain>}.

    Malformed text comes back as a single plain paragraph.
    """
    doc = richtext.parse(raw)
    if doc is None:
        return None

    return {
        "doc": richtext.to_json(doc),
        "html": str(richtext.render_html(doc)),
        "text": richtext.plain_text(doc),
    }
