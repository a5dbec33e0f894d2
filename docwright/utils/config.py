"""Configuration loader for docwright.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from docwright.sidebar.models import DEFAULT_IGNORE_PATTERNS, SidebarConfig

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"

_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class APIConfig:
    """Configuration for the Anthropic API client."""

    provider: str = "anthropic"
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096
    temperature: float = 0.2
    rate_limit_rpm: int = 50
    retry_max_attempts: int = 3
    retry_base_delay: float = 1.0


@dataclass
class SidebarSettings:
    """The ``sidebar`` section, converted to a SidebarConfig per run."""

    docs_root: str = "docs"
    output_path: str = "docs/.vitepress/sidebar-auto.ts"
    ignore_patterns: list[str] = field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS)
    )
    sort_by_prefix: bool = True

    def to_sidebar_config(self) -> SidebarConfig:
        """Build the immutable settings object used by the generator."""
        return SidebarConfig(
            docs_root=Path(self.docs_root),
            output_path=Path(self.output_path),
            ignore_patterns=tuple(self.ignore_patterns),
            sort_by_prefix=self.sort_by_prefix,
        )


@dataclass
class ChangesetConfig:
    """Configuration for changeset files."""

    directory: str = ".changeset"
    default_base: Optional[str] = None


@dataclass
class DocumentationConfig:
    """Configuration for generated documentation pages."""

    section: str = "reference"
    extensions: list[str] = field(
        default_factory=lambda: [".py", ".js", ".jsx", ".ts", ".tsx"]
    )
    update_sidebar: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = _DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    api: APIConfig = field(default_factory=APIConfig)
    sidebar: SidebarSettings = field(default_factory=SidebarSettings)
    changeset: ChangesetConfig = field(default_factory=ChangesetConfig)
    documentation: DocumentationConfig = field(default_factory=DocumentationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_sidebar_settings(data: dict) -> SidebarSettings:
    """Build SidebarSettings from the ``sidebar`` section.

    Args:
        data: Dictionary with sidebar settings.

    Returns:
        A configured SidebarSettings instance.
    """
    return SidebarSettings(
        docs_root=data.get("docs_root", "docs"),
        output_path=data.get("output_path", "docs/.vitepress/sidebar-auto.ts"),
        ignore_patterns=data.get("ignore_patterns", list(DEFAULT_IGNORE_PATTERNS)),
        sort_by_prefix=data.get("sort_by_prefix", True),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values. The API key
    is read from the ANTHROPIC_API_KEY environment variable, not from
    the config file.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    if not os.getenv("ANTHROPIC_API_KEY"):
        logger.debug("ANTHROPIC_API_KEY not set in environment")

    api_data = raw.get("api", {})
    api_config = APIConfig(
        provider=api_data.get("provider", "anthropic"),
        model=api_data.get("model", "claude-sonnet-4-20250514"),
        max_tokens=api_data.get("max_tokens", 4096),
        temperature=api_data.get("temperature", 0.2),
        rate_limit_rpm=api_data.get("rate_limit_rpm", 50),
        retry_max_attempts=api_data.get("retry_max_attempts", 3),
        retry_base_delay=api_data.get("retry_base_delay", 1.0),
    )

    changeset_data = raw.get("changeset", {})
    changeset_config = ChangesetConfig(
        directory=changeset_data.get("directory", ".changeset"),
        default_base=changeset_data.get("default_base"),
    )

    documentation_data = raw.get("documentation", {})
    documentation_config = DocumentationConfig(
        section=documentation_data.get("section", "reference"),
        extensions=documentation_data.get(
            "extensions", [".py", ".js", ".jsx", ".ts", ".tsx"]
        ),
        update_sidebar=documentation_data.get("update_sidebar", True),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get("format", _DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        api=api_config,
        sidebar=_build_sidebar_settings(raw.get("sidebar", {})),
        changeset=changeset_config,
        documentation=documentation_config,
        logging=logging_config,
    )
