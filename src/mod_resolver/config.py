"""
Runtime configuration.

Values come from the environment; a ``.env`` file in the working directory
is loaded first so ``CURSEFORGE_API_KEY`` can live there. Constructor
arguments elsewhere in the package always win over these defaults.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

CURSEFORGE_API_BASE = os.environ.get("CURSEFORGE_API_BASE", "https://api.curseforge.com")
MODRINTH_API_BASE = os.environ.get("MODRINTH_API_BASE", "https://api.modrinth.com")
MOJANG_VERSION_MANIFEST_URL = (
    "https://launchermeta.mojang.com/mc/game/version_manifest.json"
)

DEFAULT_CONCURRENCY = 8
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3

# Used by the CLI when no --release-type is given.
DEFAULT_RELEASE_TYPES = ("release", "beta")


def curseforge_api_key() -> str:
    """Return the CurseForge API key from the environment, or ``""``."""
    return os.environ.get("CURSEFORGE_API_KEY", "")
