"""
Resolution of the configured backend.

A backend is referenced by a "package.module:factory" path. The factory is
called without arguments and must return a Backend.
"""

import importlib
import logging
import os
from typing import Optional, TYPE_CHECKING

from ..errors import BackendError
from .interfaces import Backend

if TYPE_CHECKING:
    from ..settings import AppSettings

BACKEND_ENV_VAR = "WLTOOLS_BACKEND"
DEFAULT_FACTORY_NAME = "create_backend"

logger = logging.getLogger(__name__)


def resolve_backend_path(
    explicit: Optional[str] = None, settings: Optional["AppSettings"] = None
) -> str:
    """Pick the backend path from the flag, the settings or the environment.

    Raises:
        BackendError: If no source provides a path
    """
    if explicit:
        return explicit
    if settings is not None and settings.backend_factory:
        return settings.backend_factory
    from_env = os.environ.get(BACKEND_ENV_VAR, "")
    if from_env:
        return from_env
    raise BackendError(
        "no backend configured; pass --backend, set backend/factory in the "
        f"settings or export {BACKEND_ENV_VAR}"
    )


def load_backend(path: str) -> Backend:
    """Import and instantiate a backend.

    Args:
        path: "package.module:factory", or "package.module" to use the
              module's create_backend()

    Returns:
        The Backend returned by the factory

    Raises:
        BackendError: If the module or factory cannot be found, or the factory
                      does not return a Backend
    """
    module_name, _, factory_name = path.partition(":")
    factory_name = factory_name or DEFAULT_FACTORY_NAME
    if not module_name:
        raise BackendError(f"invalid backend path: \"{path}\"")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise BackendError(f"failed to import backend module {module_name}: {e}") from e

    factory = getattr(module, factory_name, None)
    if not callable(factory):
        raise BackendError(f"backend module {module_name} has no callable {factory_name}")

    backend = factory()
    if not isinstance(backend, Backend):
        raise BackendError(
            f"backend factory {path} returned {type(backend).__name__}, expected Backend"
        )

    logger.debug(f"Loaded backend '{backend.name}' from {path}")
    return backend
