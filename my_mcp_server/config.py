"""Configuration management for my-mcp-server.

This module provides the configuration dataclass and helpers for loading
settings from the environment (optionally seeded from a ``.env`` file).
"""

import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Literal, Mapping, Optional, Union

from dotenv import load_dotenv

from . import SERVER_NAME, __version__

logger = logging.getLogger(__name__)

# Environment variable -> Config field
_ENV_FIELDS: dict[str, str] = {
    "MCP_SERVER_NAME": "server_name",
    "MCP_SERVER_VERSION": "server_version",
    "MCP_TRANSPORT": "mode",
    "MCP_HTTP_HOST": "http_host",
    "MCP_HTTP_PORT": "http_port",
    "MCP_HTTP_PATH": "http_path",
    "MCP_HTTP_TIMEOUT": "request_timeout",
    "MCP_LOG_LEVEL": "log_level",
    "HF_TOKEN": "hf_token",
    "HF_IMAGE_MODEL": "hf_image_model",
}


@dataclass
class Config:
    """
    Server configuration.

    All fields have sensible defaults - the server works without any
    configuration except for image generation, which needs ``HF_TOKEN``.
    """

    server_name: str = SERVER_NAME
    server_version: str = __version__

    # Transport mode: stdio for local clients, http for streamable HTTP
    mode: Literal["stdio", "http"] = "stdio"

    # HTTP settings (only used when mode == "http")
    http_host: str = "127.0.0.1"
    http_port: int = 3141
    http_path: str = "/mcp"

    # Timeout in seconds applied to every outbound API call
    request_timeout: float = 10.0

    log_level: str = "INFO"

    # Hugging Face inference credentials for generate-image
    hf_token: Optional[str] = None
    hf_image_model: str = "black-forest-labs/FLUX.1-schnell"

    def is_valid_for_mode(self) -> tuple[bool, str]:
        """
        Check if config is valid for current mode.

        Returns:
            Tuple of (is_valid, error_message). If valid, error_message is empty string.

        Examples:
            >>> Config(mode="http", http_port=70000).is_valid_for_mode()
            (False, 'Port must be between 1 and 65535')
        """
        if self.request_timeout <= 0:
            return False, "Request timeout must be positive"
        if self.mode == "stdio":
            return True, ""
        if self.mode == "http":
            if not (1 <= self.http_port <= 65535):
                return False, "Port must be between 1 and 65535"
            if not self.http_path.startswith("/"):
                return False, "HTTP path must start with '/'"
            return True, ""
        return False, f"Unknown mode: {self.mode}"

    def to_dict(self) -> dict:
        """Convert to a plain dict (suitable for JSON serialization)."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping) -> "Config":
        """
        Create from dict, using defaults for missing keys.

        Only includes keys that are actual dataclass fields, ignoring
        any extra keys in the input dict.
        """
        return cls(
            **{k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "Config":
        """
        Create from environment variables.

        Empty values are treated as unset. Numeric fields are converted;
        a malformed number raises ValueError naming the variable.

        Examples:
            >>> Config.from_env({"MCP_HTTP_PORT": "8080"}).http_port
            8080
        """
        data: dict[str, Union[str, int, float]] = {}
        for env_name, field_name in _ENV_FIELDS.items():
            raw = environ.get(env_name, "").strip()
            if not raw:
                continue
            try:
                if field_name == "http_port":
                    data[field_name] = int(raw)
                elif field_name == "request_timeout":
                    data[field_name] = float(raw)
                elif field_name == "mode":
                    data[field_name] = raw.lower()
                else:
                    data[field_name] = raw
            except ValueError:
                raise ValueError(f"Invalid value for {env_name}: {raw!r}") from None
        return cls.from_dict(data)


# Process-wide current configuration, set once at startup
_current: Optional[Config] = None


def load_config(env_file: Optional[Union[str, Path]] = None) -> Config:
    """
    Load config from the environment, after merging a ``.env`` file.

    Variables already present in the process environment win over the
    ``.env`` file.

    Args:
        env_file: Explicit path to a dotenv file. When omitted, python-dotenv
            searches upwards from the current working directory.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()
    config = Config.from_env(os.environ)
    logger.debug("Loaded config: mode=%s, hf_token=%s",
                 config.mode, "set" if config.hf_token else "unset")
    return config


def get_config() -> Config:
    """Get the current config, loading it from the environment on first use."""
    global _current
    if _current is None:
        _current = Config.from_env(os.environ)
    return _current


def set_config(config: Optional[Config]) -> None:
    """Replace the current config (``None`` resets to lazy loading)."""
    global _current
    _current = config


def configure_logging(level: str = "INFO") -> None:
    """Route log records to stderr; stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(name)s - %(levelname)s - %(message)s",
    )
