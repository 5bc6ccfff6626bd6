"""Flat re-export of the domain model, kept for `from core.models import ...` call sites."""

from core.domain import *  # noqa: F401,F403
from core.domain import __all__  # noqa: F401
