"""Engine settings read from the domain's ``[custom]`` config section.

Every setting can be overridden by an environment variable named
``ENGAGEMENT_<NAME>`` (upper-cased), e.g. ``ENGAGEMENT_CAMPAIGN_SWEEP_INTERVAL``.
"""

import os

from engagement.domain import engagement

DEFAULTS = {
    "campaign_sweep_interval": 60,
    "directory_page_size": 100,
    "campaign_push_preview_length": 200,
    "scheduler_enabled": False,
}

_TRUTHY = {"1", "true", "yes", "on"}


def _coerce(raw, default):
    if isinstance(default, bool):
        return str(raw).strip().lower() in _TRUTHY
    if isinstance(default, int):
        return int(raw)
    return raw


def get_setting(name: str):
    """Return a setting, preferring the environment over ``domain.toml``."""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown engagement setting: {name}")

    default = DEFAULTS[name]
    env_value = os.getenv(f"ENGAGEMENT_{name.upper()}")
    if env_value is not None:
        return _coerce(env_value, default)

    custom = engagement.config.get("custom") or {}
    if name in custom:
        return _coerce(custom[name], default)

    return default
