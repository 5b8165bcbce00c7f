"""Status helper used by the API health-check."""


def get_health_status() -> str:
    """Return a static status string."""
    return "ok"
