#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Central configuration access.
#
"""
Central configuration access helpers.
"""

import os
from typing import Any

from utils import load_config


DEFAULT_CONFIG_PATH = "cfg/config.yaml"


def default_config_path() -> str:
    return os.getenv("CHOPO_CONFIG", DEFAULT_CONFIG_PATH)


def get_config(config_path: str | None = None) -> dict[str, Any]:
    return load_config(config_path=config_path or default_config_path())


def get_config_section(
    section: str | None = None,
    config_path: str | None = None,
) -> dict[str, Any]:
    if section:
        return load_config(config_path=config_path or default_config_path(), subconfig=section)
    return get_config(config_path)
