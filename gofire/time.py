from __future__ import annotations

import os

import pytz


# Keep timezone handling consistent across the project.
LOCAL_TZ = pytz.timezone(os.getenv("GOFIRE_TZ", "UTC"))
