"""
Package settings for envbind itself.

These only affect logging setup; the binding engine never reads them.
"""

import os

# Set ENVBIND_LOG_LEVEL=DEBUG to see per-field binding events
LOG_LEVEL = os.getenv("ENVBIND_LOG_LEVEL", "WARNING")
