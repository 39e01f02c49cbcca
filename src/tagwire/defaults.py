AUTO_INJECTION_TAG = "auto"
"""Tag value that requests resolution by type. Never usable as a dependency name."""

DEFAULT_UNNAMED_PREFIX = "unnamed"
"""Prefix of names generated for anonymous registrations (``unnamed.0``, ``unnamed.1``...)."""
