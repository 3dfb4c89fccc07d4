# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for the Petstore client."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("PETSTORE_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for library or script use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def stdlib_log_sink(name: str = "petstore_client.http", level: int = logging.INFO):
    """Return a line callback that forwards HTTP wire log lines to a stdlib logger."""
    target = logging.getLogger(name)

    def _sink(line: str) -> None:
        target.log(level, "%s", line)

    return _sink


__all__ = ["setup_logging", "stdlib_log_sink"]
