"""Tests for host prerequisite checks and compose command selection."""

import pytest

from conftest import FakeHost
from pico_deploy.errors import MissingDependency
from pico_deploy.models.schemas import ComposeCommand
from pico_deploy.prerequisites import check_prerequisites


def test_missing_docker_is_fatal():
    host = FakeHost(tools=("docker-compose",))
    with pytest.raises(MissingDependency, match="Docker is not installed"):
        check_prerequisites(host)


def test_standalone_compose_preferred():
    host = FakeHost(tools=("docker", "docker-compose"), plugin=True)
    compose = check_prerequisites(host)
    assert compose == ComposeCommand.standalone()
    assert compose.is_standalone
    # No need to check the plugin when the standalone binary is there
    assert host.calls == []


def test_falls_back_to_plugin():
    host = FakeHost(tools=("docker",), plugin=True)
    compose = check_prerequisites(host)
    assert compose.argv("up", "-d") == ["docker", "compose", "up", "-d"]
    assert host.calls == [["docker", "compose", "version"]]


def test_no_compose_at_all():
    host = FakeHost(tools=("docker",), plugin=False)
    with pytest.raises(MissingDependency, match="Docker Compose") as exc:
        check_prerequisites(host)
    assert exc.value.hint


def test_compose_command_display():
    assert ComposeCommand.integrated().display("logs", "-f") == "docker compose logs -f"
    assert str(ComposeCommand.standalone()) == "docker-compose"
