"""
Configuration module.

Frozen dataclass defaults, YAML-backed loading with layered precedence,
and validation of user-supplied settings.
"""
