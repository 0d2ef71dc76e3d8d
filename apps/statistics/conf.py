from datetime import timedelta

from django.conf import settings

DEFAULTS = {
    "OWNER_VIEW_COOLDOWN": timedelta(hours=1),
    "ABUSE_THRESHOLD": 5,            # accepted views per identity per window before blocking
    "ABUSE_WINDOW": timedelta(hours=24),
    "MOST_VIEWED_LIMIT": 10,
}


def tracking_setting(name: str):
    """
    Value from settings.VIEW_TRACKING, falling back to DEFAULTS.
    """
    overrides = getattr(settings, "VIEW_TRACKING", None) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
