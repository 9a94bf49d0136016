"""
Environment File Loading

Loads ``.env``-style files from a directory into ``os.environ`` so that
Settings (pydantic-settings) picks them up. Files are read in order and
later files override earlier ones as well as variables already present in
the process environment.

Usage:
    from microkit.core.env import load_env_sync
    from microkit.core.config import reload_settings

    load_env_sync(project_dir)
    settings = reload_settings()
"""

import asyncio
import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import dotenv_values

from microkit.core.config.constants import DEFAULT_ENV_FILES
from microkit.core.logging import get_logger

logger = get_logger(__name__)

EnvVars = dict[str, str]


def load_env_sync(directory: str | os.PathLike, files: Iterable[str] | None = None) -> EnvVars:
    """
    Load environment variable files of a directory into ``os.environ``.

    Args:
        directory: Directory containing the env files
        files: Custom list of file names (default: .env, .env.local, .env.tests)

    Returns:
        The variables that were loaded, merged in file order.
    """
    env: EnvVars = {}

    for name in files or DEFAULT_ENV_FILES:
        path = Path(directory) / name
        if not path.is_file():
            continue

        values = dotenv_values(path, encoding="utf-8")
        for key, value in values.items():
            if value is None:
                continue
            env[key] = os.environ[key] = value

        logger.debug("Env file loaded", stage="ENV.LOAD", file=str(path), count=len(values))

    return env


async def load_env(directory: str | os.PathLike, files: Iterable[str] | None = None) -> EnvVars:
    """Async variant of :func:`load_env_sync`; file I/O runs in a worker thread."""
    return await asyncio.to_thread(load_env_sync, directory, files)
