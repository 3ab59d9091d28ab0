"""Process-wide console configuration."""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from declick.exceptions import ConfigFileInvalidError, wrap_pydantic_error

logger = logging.getLogger(__name__)


class ConsoleConfig(BaseModel):
    """
    Settings shared by every command of one process run.

    Built once at startup and handed to each ``CommandLifecycle``; it is
    never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    default_diagnostics: bool = Field(
        default=True,
        description=(
            "Print execution time and peak memory after every command. "
            "When disabled, commands print them only with --diagnostics."
        ),
    )
    interactive: bool = Field(
        default=True,
        description="Prompt for missing required arguments (overridden by --no-interaction)",
    )
    success_exit_code: int = Field(default=0, ge=0, le=255, description="Exit code for success")
    failure_exit_code: int = Field(
        default=1, ge=0, le=255, description="Exit code for a command returning False"
    )

    @classmethod
    def load(cls, path: Path) -> "ConsoleConfig":
        """
        Load and validate a config from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the JSON syntax is invalid or the file is empty
            ConfigValidationError: If values fail validation
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        json_content = path.read_text()
        if not json_content.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            config = cls.model_validate_json(json_content)
        except ValidationError as e:
            logger.error(f"Validation error loading {cls.__name__} from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {cls.__name__} from {path}")
        return config

    @classmethod
    def load_or_default(cls, path: Path | None) -> "ConsoleConfig":
        """
        Load config from file, or return defaults when there is no file.

        Args:
            path: Path to a JSON config file, or None for defaults
        """
        if path is None or not path.exists():
            return cls()
        return cls.load(path)
