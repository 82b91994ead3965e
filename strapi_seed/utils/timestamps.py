from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time in the ISO-8601 form Strapi stores, e.g. 2024-05-01T09:30:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
