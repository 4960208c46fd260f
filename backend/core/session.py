"""
Process-wide catalog match state.

The API serves a single session: one Workspace holding the uploaded
catalogs, the active selection and the current request set. Routers get it
through the get_workspace dependency so tests can swap in a fresh one.
"""
import logging
from pathlib import Path
from typing import Optional

from sourcing.catalog_match import FieldConfig, Workspace, default_config, load_config

from .config import settings

logger = logging.getLogger(__name__)

_workspace: Optional[Workspace] = None


def _load_field_config() -> FieldConfig:
    if settings.FIELD_CONFIG_PATH:
        path = Path(settings.FIELD_CONFIG_PATH)
        logger.info(f"Loading field config from {path}")
        return load_config(path)
    return default_config()


def get_workspace() -> Workspace:
    """Get the shared workspace, creating it on first use."""
    global _workspace
    if _workspace is None:
        _workspace = Workspace(_load_field_config())
    return _workspace


def reset_workspace() -> Workspace:
    """Discard all catalogs and requests."""
    global _workspace
    _workspace = Workspace(_load_field_config())
    return _workspace
