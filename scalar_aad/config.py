"""
Engine configuration.

Settings are read once from the environment and can be replaced at runtime:

    SCALAR_AAD_CHECK_ZERO_GRADS   "1"/"true" to make backward() refuse graphs
                                  that still carry gradients from a prior pass
    SCALAR_AAD_LOG_LEVEL          level name for configure_logging()
"""

import logging
import os
import sys
from dataclasses import dataclass

_TRUE = ("1", "true", "yes", "on")


@dataclass
class EngineConfig:
    """Shared settings for the backward engine"""
    check_zero_grads: bool = False
    log_level: str = "WARNING"

    @staticmethod
    def from_env() -> "EngineConfig":
        return EngineConfig(
            check_zero_grads=os.getenv("SCALAR_AAD_CHECK_ZERO_GRADS", "").strip().lower() in _TRUE,
            log_level=os.getenv("SCALAR_AAD_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
        )


_config = EngineConfig.from_env()


def get_config() -> EngineConfig:
    return _config


def set_config(cfg: EngineConfig) -> EngineConfig:
    """Replace the process-wide config; returns the previous one."""
    global _config
    prev, _config = _config, cfg
    return prev


def configure_logging(level=None) -> logging.Logger:
    """
    Attach a stderr handler to the package logger (for scripts and the demo).
    Library code never calls this.
    """
    logger = logging.getLogger("scalar_aad")
    logger.setLevel(level if level is not None else _config.log_level)

    if not any(getattr(h, "_scalar_aad", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._scalar_aad = True
        logger.addHandler(handler)
    return logger
