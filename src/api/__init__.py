"""
HTTP surface for the employee resource.
"""

from .app import create_app
from .config import AppConfig

__all__ = ["create_app", "AppConfig"]
