"""Shared FastAPI dependencies."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from annolayout.config import get_settings
from annolayout.services.layout_resolver import AutoLayoutService


@lru_cache
def get_layout_service() -> AutoLayoutService:
    """Process-wide layout service; its config never changes after startup."""
    return AutoLayoutService(get_settings().layout_config())


LayoutService = Annotated[AutoLayoutService, Depends(get_layout_service)]
