"""Locating the transfer engine implementation.

An engine is referenced as ``package.module:attribute`` where the attribute
is a callable taking :class:`RateLimits` and returning a
:class:`TransferEngine`. Without an explicit reference the first factory
registered under the ``btclient.engines`` entry point group is used.
"""

from __future__ import annotations

import importlib
from importlib.metadata import entry_points

from btclient.engine.base import EngineFactory
from btclient.utils.exceptions import EngineError
from btclient.utils.logging_config import get_logger

logger = get_logger(__name__)

ENTRY_POINT_GROUP = "btclient.engines"


def load_engine_factory(reference: str | None = None) -> EngineFactory:
    """Return the engine factory named by ``reference`` or the installed default.

    Raises:
        EngineError: nothing is configured or the reference cannot be loaded

    """
    if reference:
        return _load_from_reference(reference)

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        logger.debug("Using engine entry point %s = %s", ep.name, ep.value)
        try:
            factory = ep.load()
        except Exception as e:
            msg = f"Failed to load engine entry point '{ep.name}': {e}"
            raise EngineError(msg, {"entry_point": ep.value}) from e
        return _ensure_callable(factory, ep.value)

    msg = (
        "No transfer engine configured: pass --engine MODULE:ATTR, set "
        f"BTCLIENT_ENGINE, or install a package providing '{ENTRY_POINT_GROUP}'"
    )
    raise EngineError(msg)


def _load_from_reference(reference: str) -> EngineFactory:
    module_path, sep, attr_path = reference.partition(":")
    if not sep or not module_path or not attr_path:
        msg = f"Invalid engine reference '{reference}', expected 'module:attribute'"
        raise EngineError(msg)

    try:
        obj = importlib.import_module(module_path)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as e:
        msg = f"Failed to load engine '{reference}': {e}"
        raise EngineError(msg, {"reference": reference}) from e

    return _ensure_callable(obj, reference)


def _ensure_callable(obj: object, reference: str) -> EngineFactory:
    if not callable(obj):
        msg = f"Engine reference '{reference}' is not callable"
        raise EngineError(msg)
    return obj  # type: ignore[return-value]
