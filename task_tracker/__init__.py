"""Multi-user task tracker API with role-gated administration."""

__version__ = "1.0.0"
