from .exceptions import InvariantViolation

MAX_QUICK_STATS = 8

QUICK_STAT_ICONS = {
    "Code", "Server", "BookOpen", "Briefcase",
    "Award", "GraduationCap", "Globe", "FileText",
}
QUICK_STAT_COLORS = {
    "blue", "green", "purple", "orange",
    "red", "indigo", "pink", "yellow",
}

def normalize_quick_stats(stats):
    """
    Validate quick stats, sort them by their submitted order (ties keep
    list position) and renumber order 0..n-1.
    """
    if stats is None:
        return []

    if not isinstance(stats, list):
        raise InvariantViolation("quick_stats must be a list.")

    if len(stats) > MAX_QUICK_STATS:
        raise InvariantViolation(f"Maximum {MAX_QUICK_STATS} quick stats allowed.")

    normalized = []
    for index, stat in enumerate(stats):
        if not isinstance(stat, dict):
            raise InvariantViolation("Each quick stat must be an object.")

        icon = stat.get("icon")
        color = stat.get("color")
        if icon not in QUICK_STAT_ICONS:
            raise InvariantViolation(f"Unknown quick stat icon: {icon!r}")
        if color not in QUICK_STAT_COLORS:
            raise InvariantViolation(f"Unknown quick stat color: {color!r}")
        if not stat.get("text"):
            raise InvariantViolation("Quick stat text is required.")

        order = stat.get("order", index)
        if not isinstance(order, int) or isinstance(order, bool):
            raise InvariantViolation(f"Quick stat order must be an integer: {order!r}")

        normalized.append({
            "icon": icon,
            "text": stat["text"],
            "text_native": stat.get("text_native") or None,
            "color": color,
            "order": order,
        })

    normalized.sort(key=lambda s: s["order"])
    for index, stat in enumerate(normalized):
        stat["order"] = index

    return normalized
