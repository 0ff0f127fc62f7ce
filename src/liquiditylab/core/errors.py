"""
Error classes for LiquidityLab.

This module defines the exception classes raised by the configuration loader
and the workbook importer. The core pipeline itself never raises on dirty or
empty input; it resolves lookup misses to documented fallback values instead.
"""

from __future__ import annotations


class ConfigError(Exception):
    """
    Configuration error during monitor setup.

    This exception is raised when a configuration file or mapping contains
    values of the wrong type or outside their accepted range.

    **Common Causes:**
    - Non-numeric ``starting_balance``
    - ``window_size`` lower than 1
    - Unknown ``granularity`` value
    - Highlight range whose end precedes its start

    **Example Usage:**
        ```python
        from liquiditylab.config import load_config
        from liquiditylab.core.errors import ConfigError

        try:
            config = load_config({"window_size": 0})
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class IngestError(Exception):
    """
    Raised when a source workbook cannot be read at all.

    Individual malformed rows never raise; they are dropped by the normalizer.
    This error covers the file level only (missing file, unreadable format).

    Attributes:
        source: Path or label of the source that failed
    """

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"[{source}] {message}")
