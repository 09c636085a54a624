"""Shared helpers for Kleff Pairing: logging, ids and random sources."""

# Kleff Pairing
# Copyright (C) 2025  Kleff Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import random
import uuid
from typing import Optional

from kleffpairing.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

_PACKAGE_LOGGER = "kleffpairing"
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_package_logger() -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        package_logger.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
        package_logger.setLevel(getattr(logging, level_name, logging.WARNING))
    return package_logger


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger that propagates to the package logger.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Configured logger instance
    """
    _configure_package_logger()
    return logging.getLogger(name)


def generate_id(prefix: str = "") -> str:
    """Generate a unique identifier, optionally prefixed (e.g. ``match_``)."""
    unique = uuid.uuid4().hex
    return f"{prefix}_{unique}" if prefix else unique


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return a local random source; seeded when reproducibility is needed."""
    return random.Random(seed) if seed is not None else random.Random()
