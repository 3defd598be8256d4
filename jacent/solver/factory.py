"""
Strategy Factory Module - Registry and factory for strategy instantiation.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from ..settings import load_settings
from .base import SolverStrategy

logger = logging.getLogger(__name__)

# Global registry of strategies, filled at import time
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}

FALLBACK_STRATEGY = "dfs"


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Decorator to register a strategy class under its name.

    Usage:
        @register_strategy
        class MyStrategy(SolverStrategy):
            name = "my_strategy"
            ...
    """
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str, settings: Optional[Dict[str, Any]] = None,
                    **kwargs: Any) -> SolverStrategy:
    """
    Create a strategy instance by name.

    Args:
        name: Strategy name ("dfs" or "bfs")
        settings: Settings passed to the strategy, loaded from
                  config.json when omitted
        **kwargs: Additional arguments passed to strategy constructor

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name not found
    """
    if name not in _STRATEGIES:
        available = ", ".join(_STRATEGIES.keys())
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return _STRATEGIES[name](settings=settings, **kwargs)


def get_strategy_names() -> List[str]:
    """List of registered strategy names."""
    return list(_STRATEGIES.keys())


def get_default_strategy_name(settings: Optional[Dict[str, Any]] = None) -> str:
    """
    Strategy named by the "default_strategy" setting.

    Args:
        settings: Settings to read, loaded from config.json when omitted

    Returns:
        Configured strategy if registered, else "dfs"
    """
    if settings is None:
        settings = load_settings()

    configured = settings.get("default_strategy", FALLBACK_STRATEGY)
    if configured in _STRATEGIES:
        return configured

    logger.warning(f"Configured strategy {configured!r} is not registered, "
                   f"using {FALLBACK_STRATEGY!r}")
    return FALLBACK_STRATEGY
