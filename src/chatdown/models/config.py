"""Pydantic configuration models for chatdown."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ConversionConfig(BaseModel):
    """Configuration for HTML to chat markdown conversion."""

    plaintext: bool = Field(
        False,
        description="Capture untagged top-level text (text inside recognized tags is always kept)",
    )
    table_width: int = Field(
        1000,
        ge=20,
        description="Maximum rendered table width in columns",
    )

    model_config = {"extra": "forbid"}


class ManualConfig(BaseModel):
    """Configuration for manual page lookup and rendering."""

    root: Path = Field(Path("/usr/share/man"), description="Root of the man page tree")
    pandoc_command: str = Field("pandoc", description="Document converter executable")
    pandoc_args: list[str] = Field(
        default_factory=lambda: ["-r", "man", "-t", "html"],
        description="Arguments turning roff on stdin into HTML on stdout",
    )

    model_config = {"extra": "forbid"}


class ServerConfig(BaseModel):
    """Configuration for the HTTP service."""

    host: str = Field("127.0.0.1", description="Interface to bind")
    port: int = Field(3014, ge=1, le=65535, description="Port to listen on")

    model_config = {"extra": "forbid"}


class ChatdownConfig(BaseModel):
    """
    Root configuration model for chatdown.

    Example:
        config = ChatdownConfig(
            manual=ManualConfig(root=Path("/usr/local/share/man")),
            server=ServerConfig(port=8080),
        )

    YAML format:
        conversion:
          table_width: 80
        manual:
          root: /usr/local/share/man
        server:
          port: 8080
    """

    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    manual: ManualConfig = Field(default_factory=ManualConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ChatdownConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ChatdownConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
