"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with SKILL_AUDIT_ prefix, or the short legacy
   names (SKILL_DIRS, MEMORY_DIR, AUDIT_DAYS, SKIP_HUB)
3. .env file (if SKILL_AUDIT_ENV_FILE points at one)

Settings are frozen: build them once at startup and pass them down.
"""

import os as _os
import pathlib as _pathlib

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import skillaudit.constants as constants


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit SKILL_AUDIT_ENV_FILE is honoured. If it is set but
    doesn't exist, nothing is loaded rather than falling back silently.
    """
    if env_file := _os.environ.get("SKILL_AUDIT_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


def _home_label(path: _pathlib.Path) -> str:
    """Render a path with the home directory collapsed to ``~``."""
    text = str(path)
    home = str(_pathlib.Path.home())
    if home and home != "/" and (text == home or text.startswith(home + _os.sep)):
        return "~" + text[len(home):]
    return text


class Settings(_pydantic_settings.BaseSettings):
    """
    Skill Audit configuration settings.

    Every field can be set via SKILL_AUDIT_<FIELD> or, for the four
    legacy fields, via their bare variable names.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="SKILL_AUDIT_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: object) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without
        .env interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[arg-type]

    skill_dirs: str = _pydantic.Field(
        default=constants.DEFAULT_SKILL_DIRS,
        description="Comma-separated skill root directories (later roots win)",
        validation_alias=_pydantic.AliasChoices(
            "SKILL_AUDIT_SKILL_DIRS", "SKILL_DIRS"
        ),
    )

    log_dir: str = _pydantic.Field(
        default=constants.DEFAULT_LOG_DIR,
        description="Directory scanned for usage evidence",
        validation_alias=_pydantic.AliasChoices(
            "SKILL_AUDIT_LOG_DIR", "MEMORY_DIR"
        ),
    )

    days: int = _pydantic.Field(
        default=constants.DEFAULT_AUDIT_DAYS,
        ge=0,
        description="Usage window in days",
        validation_alias=_pydantic.AliasChoices(
            "SKILL_AUDIT_DAYS", "AUDIT_DAYS"
        ),
    )

    skip_registry: bool = _pydantic.Field(
        default=False,
        description="Skip registry version lookups",
        validation_alias=_pydantic.AliasChoices(
            "SKILL_AUDIT_SKIP_REGISTRY", "SKIP_HUB"
        ),
    )

    registry_command: str = _pydantic.Field(
        default=constants.DEFAULT_REGISTRY_COMMAND,
        min_length=1,
        description="Registry CLI invoked as '<command> search <name>'",
    )

    registry_timeout: float = _pydantic.Field(
        default=constants.DEFAULT_REGISTRY_TIMEOUT,
        gt=0,
        description="Timeout for one registry search (seconds)",
    )

    vendor: str = _pydantic.Field(
        default=constants.DEFAULT_VENDOR,
        min_length=1,
        description="Metadata namespace holding requires.bins/requires.env/emoji",
    )

    @property
    def skill_dir_paths(self) -> list[_pathlib.Path]:
        """Configured skill roots, expanded and resolved, in the given order."""
        paths: list[_pathlib.Path] = []
        for entry in self.skill_dirs.split(","):
            entry = entry.strip()
            if entry:
                paths.append(_pathlib.Path(entry).expanduser().resolve())
        return paths

    @property
    def log_dir_path(self) -> _pathlib.Path:
        """Usage log directory, expanded and resolved."""
        return _pathlib.Path(self.log_dir).expanduser().resolve()

    @staticmethod
    def source_label(path: _pathlib.Path) -> str:
        """Display label for a skill root (home directory shown as ~)."""
        return _home_label(path)
