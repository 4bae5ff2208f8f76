"""
errorhints: look up remediation hints for error messages in a YAML catalog.
"""

__all__ = [
    "config",
    "hints",
    "search",
    "web",
    "cli",
]
