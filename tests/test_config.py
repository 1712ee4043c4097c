import textwrap
from pathlib import Path

import pytest

from adncli.config import AppConfig, parse_app_config


def _write(tmp_path, body):
    path = tmp_path / "config.xml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def test_parse_app_config_reads_all_sections(tmp_path):
    path = _write(
        tmp_path,
        """\
        <config>
          <http>
            <timeout>7.5</timeout>
            <user-agent> reader/2.0 </user-agent>
            <strict-status>true</strict-status>
          </http>
          <entities>NBSP</entities>
          <logging>
            <level>DEBUG</level>
            <file>logs/reader.log</file>
          </logging>
        </config>
        """,
    )

    config = parse_app_config(str(path))

    assert config.timeout == 7.5
    assert config.user_agent == "reader/2.0"
    assert config.strict_status is True
    assert config.entity_mode == "nbsp"
    assert config.logging.level == "DEBUG"
    assert config.logging.file == str((tmp_path / "logs" / "reader.log").resolve())


def test_parse_app_config_defaults_for_empty_file(tmp_path):
    path = _write(tmp_path, "<config/>")

    assert parse_app_config(str(path)) == AppConfig()


def test_parse_app_config_keeps_absolute_log_path(tmp_path):
    log_path = tmp_path / "abs.log"
    path = _write(
        tmp_path, f"<config><logging><file>{log_path}</file></logging></config>"
    )

    assert Path(parse_app_config(str(path)).logging.file) == log_path


def test_parse_app_config_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_app_config(str(tmp_path / "missing.xml"))


@pytest.mark.parametrize(
    "body",
    [
        "<config><http><timeout>soon</timeout></http></config>",
        "<config><http><timeout>0</timeout></http></config>",
        "<config><entities>some</entities></config>",
    ],
)
def test_parse_app_config_rejects_invalid_values(tmp_path, body):
    path = _write(tmp_path, body)

    with pytest.raises(ValueError):
        parse_app_config(str(path))
