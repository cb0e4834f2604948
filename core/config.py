# =============================================================================
# core/config.py  -  Environment Configuration
# =============================================================================
#
# Two values are required: N8N_API_URL and N8N_API_KEY.  Neither is checked
# fatally.  The server starts anyway, logs what is missing, and the first
# tool call fails downstream with a readable n8n API error.  That keeps a
# misconfigured server discoverable (tools/list still works) instead of
# dying silently inside the host's subprocess.
#
# main.py loads a .env file before this module reads anything, so both
# "export N8N_API_KEY=..." and a .env next to the project work.
# =============================================================================

import os
from collections.abc import Mapping
from dataclasses import dataclass

from core.n8n_client import normalize_base_url

REQUIRED_VARIABLES = ("N8N_API_URL", "N8N_API_KEY")


@dataclass(frozen=True)
class Settings:
    api_url: str
    api_key: str
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        return normalize_base_url(self.api_url)

    @property
    def missing(self) -> list[str]:
        values = {"N8N_API_URL": self.api_url, "N8N_API_KEY": self.api_key}
        return [name for name in REQUIRED_VARIABLES if not values[name]]


def load_settings(environ: Mapping[str, str] = os.environ) -> Settings:
    return Settings(
        api_url=environ.get("N8N_API_URL", ""),
        api_key=environ.get("N8N_API_KEY", ""),
        log_level=environ.get("N8N_LOG_LEVEL", "INFO").upper(),
    )
