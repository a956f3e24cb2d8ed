"""
Gemini credential resolution.

Looks for a usable API key in three places, in order:
1. Named environment variables (GEMINI_API_KEY, GOOGLE_API_KEY, ...)
2. The same names in the project's .env file
3. Any environment variable whose value looks like a Google API key

Never raises. An absent credential is a normal state that switches
generation into demo mode.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from .settings import PLACEHOLDER_KEYS, PLACEHOLDER_MARKERS, Settings

logger = logging.getLogger(__name__)

MISSING_REASON = "Missing API Key"
PLACEHOLDER_REASON = "Placeholder API Key Detected"


@dataclass(frozen=True)
class CredentialDiagnosis:
    """Outcome of a credential lookup, safe to log and show."""

    credential: Optional[str]
    source: Optional[str] = None
    reason: Optional[str] = None
    env_var_present: bool = False
    key_length: int = 0

    @property
    def available(self) -> bool:
        return self.credential is not None

    @property
    def mode(self) -> str:
        return "live" if self.available else "demo"


def mask_key(key: Optional[str]) -> str:
    """Show only the first four characters of a key."""
    if not key:
        return "<none>"
    return f"{key[:4]}***"


class CredentialResolver:
    """Finds a Gemini API key from the environment."""

    def __init__(
        self,
        settings: Settings,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.settings = settings
        self.environ = environ if environ is not None else os.environ

    def is_valid(self, value: Optional[str]) -> bool:
        """Reject empty values, template placeholders and short strings."""
        if not value:
            return False
        value = value.strip()
        if not value:
            return False
        upper = value.upper()
        if upper in PLACEHOLDER_KEYS:
            return False
        if any(marker in upper for marker in PLACEHOLDER_MARKERS):
            return False
        return len(value) >= self.settings.credential_min_length

    def looks_like_key(self, value: Optional[str]) -> bool:
        """Key-shape heuristic used by the full environment scan."""
        if not value:
            return False
        value = value.strip()
        return (
            value.startswith(self.settings.credential_key_prefix)
            and len(value) >= self.settings.credential_min_scan_length
        )

    def resolve(self) -> Optional[str]:
        """Return a usable API key, or None."""
        return self.diagnose().credential

    def diagnose(self) -> CredentialDiagnosis:
        """Resolve the key and describe where it came from (or why not)."""
        names = self.settings.credential_env_vars
        primary = names[0] if names else None
        primary_value = self.environ.get(primary) if primary else None

        for name in names:
            value = self.environ.get(name)
            if self.is_valid(value):
                return self._found(value.strip(), name)

        dotenv_file = self._read_dotenv()
        for name in names:
            value = dotenv_file.get(name)
            if self.is_valid(value):
                logger.info(f"Loaded {name} from {self.settings.dotenv_path} (environment value missing or placeholder)")
                return self._found(value.strip(), ".env")

        for name, value in self.environ.items():
            if name in names:
                continue
            if self.looks_like_key(value) and self.is_valid(value):
                logger.info(f"Found Gemini-shaped key in {name}")
                return self._found(value.strip(), name)

        any_present = any(self.environ.get(name) for name in names) or any(
            dotenv_file.get(name) for name in names
        )
        reason = PLACEHOLDER_REASON if any_present else MISSING_REASON
        logger.warning(f"No valid Gemini API key found ({reason})")
        return CredentialDiagnosis(
            credential=None,
            reason=reason,
            env_var_present=bool(primary_value),
            key_length=len(primary_value or ""),
        )

    def _found(self, key: str, source: str) -> CredentialDiagnosis:
        logger.info(f"API key resolved from {source}. Length: {len(key)}, Prefix: {mask_key(key)}")
        return CredentialDiagnosis(
            credential=key,
            source=source,
            env_var_present=True,
            key_length=len(key),
        )

    def _read_dotenv(self) -> Mapping[str, Optional[str]]:
        path = Path(self.settings.dotenv_path)
        if not path.is_file():
            return {}
        try:
            return dotenv_values(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return {}
