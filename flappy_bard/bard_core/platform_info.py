"""
Platform Info
=============

One-time classification of the host as touch-primary or key-primary.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

TOUCH_ENV_VAR = "FLAPPY_BARD_TOUCH"

_TOUCH_PLATFORMS = ("android", "ios")
_TRUTHY = ("1", "true", "yes", "on")


def detect_touch_primary(platform: Optional[str] = None, environ: Optional[dict] = None) -> bool:
    """
    Decide whether the host is primarily a touch device.

    The FLAPPY_BARD_TOUCH environment variable overrides the platform
    check when set.

    Args:
        platform: Platform name. Uses sys.platform if None.
        environ: Environment mapping. Uses os.environ if None.
    """
    if environ is None:
        environ = os.environ
    if platform is None:
        platform = sys.platform

    override = environ.get(TOUCH_ENV_VAR)
    if override is not None and override.strip() != "":
        return override.strip().lower() in _TRUTHY

    return platform.lower() in _TOUCH_PLATFORMS
