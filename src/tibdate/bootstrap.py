from __future__ import annotations

import logging

from tibdate.core.engine import EngineRegistry
from tibdate.engines.factory import make_engine
from tibdate.engines.specs import ALL_SPECS

logger = logging.getLogger(__name__)


def build_registry() -> EngineRegistry:
    engines = {}
    for name, spec in ALL_SPECS.items():
        engines[name] = make_engine(spec)
    logger.debug("built engine registry: %s", sorted(engines))
    return EngineRegistry(engines)
