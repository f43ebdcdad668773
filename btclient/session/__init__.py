"""Run lifecycle orchestration."""

from __future__ import annotations

from btclient.session.lifecycle import LifecycleOrchestrator, engine_session

__all__ = ["LifecycleOrchestrator", "engine_session"]
