"""REST API for the cutting optimizer."""

from cutplan.web.app import create_app

__all__ = ["create_app"]
