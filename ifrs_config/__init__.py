"""
ifrs_config -- single public entrypoint for presentation configuration.

Responsibility:
    ``get_config()`` is the only way runtime code obtains the account-type
    to section lookup table and the labels printed on statements.  The
    table is loaded from ``ifrs.yaml`` once per process, validated, and
    frozen.

Invariants enforced:
    - Every account type maps to exactly one section; loading fails fast
      with ``MissingSectionMapping`` otherwise.
    - The returned ``IFRSConfig`` is immutable and shared.

Audit relevance:
    Every load emits an ``IFRS_CONFIG_TRACE`` log entry with the source
    path and the checksum of the parsed table.
"""

from __future__ import annotations

import threading
from pathlib import Path

from ifrs_config.loader import load_config
from ifrs_config.schema import IFRSConfig
from ifrs_kernel.logging_config import get_logger

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "IFRSConfig",
    "get_config",
    "load_config",
    "reset_config",
]

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "ifrs.yaml"

_active: IFRSConfig | None = None
_lock = threading.Lock()


def get_config(path: Path | None = None) -> IFRSConfig:
    """
    Return the process-wide configuration, loading it on first use.

    Args:
        path: Override file, honoured only on the first (loading) call.
    """
    global _active
    with _lock:
        if _active is None:
            source = path or DEFAULT_CONFIG_PATH
            _active = load_config(source)
            _logger.info(
                "IFRS_CONFIG_TRACE",
                extra={
                    "trace_type": "IFRS_CONFIG_TRACE",
                    "source": str(source),
                    "checksum": _active.checksum,
                    "section_count": len(_active.sections),
                },
            )
        return _active


def reset_config() -> None:
    """Drop the loaded configuration. FOR TESTING ONLY."""
    global _active
    with _lock:
        _active = None
