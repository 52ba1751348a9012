"""Transaction timelines and customer relationship insights."""

from .main import create_application

__all__ = ["create_application"]
