"""Jinja2 environment for adncli templates."""

from __future__ import annotations

from importlib import resources

from jinja2 import Environment, FileSystemLoader, StrictUndefined

_ENV: Environment | None = None


def _rule(width: int = 80, char: str = "-") -> str:
    """Return a horizontal separator line."""
    return char * width


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        _ENV = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        _ENV.globals["rule"] = _rule
    return _ENV
