"""Configuration loading for the reader."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from .feeds import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ENTITY_MODES

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass
class AppConfig:
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    strict_status: bool = False
    entity_mode: str = "full"
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def parse_app_config(path: str) -> AppConfig:
    """Parse the application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    tree = ET.parse(config_path)
    root = tree.getroot()
    config = AppConfig()

    # HTTP
    http_node = root.find("http")
    if http_node is not None:
        timeout = http_node.findtext("timeout")
        if timeout:
            try:
                config.timeout = float(timeout)
            except ValueError:
                raise ValueError(f"Invalid <timeout> value: {timeout.strip()}")
            if config.timeout <= 0:
                raise ValueError("<timeout> must be positive.")

        user_agent = http_node.findtext("user-agent")
        if user_agent and user_agent.strip():
            config.user_agent = user_agent.strip()

        config.strict_status = _parse_bool(
            http_node.findtext("strict-status", "false")
        )

    # Entities
    entity_mode = root.findtext("entities")
    if entity_mode:
        entity_mode = entity_mode.strip().lower()
        if entity_mode not in ENTITY_MODES:
            raise ValueError(
                f"Unsupported <entities> value: {entity_mode} (expected one of {', '.join(ENTITY_MODES)})"
            )
        config.entity_mode = entity_mode

    # Logging
    log_node = root.find("logging")
    if log_node is not None:
        config.logging.level = log_node.findtext("level", "WARNING").strip()
        log_file = log_node.findtext("file")
        if log_file:
            config.logging.file = _resolve_path(config_path, log_file.strip())

    logger.debug("Parsed configuration: %s", config)
    return config
