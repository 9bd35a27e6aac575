"""Hydra ConfigStore registration for instantiable transforms."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hydra.core.config_store import ConfigStore
from loguru import logger


def register(group: str) -> Callable[[type[Any]], type[Any]]:
    """Class decorator storing a ``{"_target_": ...}`` node under ``group``.

    The config name is the class name, so ``@register("transforms")`` on
    ``DigitAugmentation`` is addressable as ``transforms=DigitAugmentation``.
    """

    def _store(target_cls: type[Any]) -> type[Any]:
        target = f"{target_cls.__module__}.{target_cls.__qualname__}"
        ConfigStore.instance().store(
            group=group, name=target_cls.__name__, node={"_target_": target}
        )
        logger.debug(f"Registered {group}/{target_cls.__name__} -> {target}")
        return target_cls

    return _store
