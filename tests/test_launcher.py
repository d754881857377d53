"""Tests for the service launcher."""

import pytest

from conftest import FakeHost
from pico_deploy.errors import OrchestrationFailed
from pico_deploy.launcher import launch_services
from pico_deploy.models.schemas import ComposeCommand
from pico_deploy.variants import CPU, GPU


def test_launch_success_report(tmp_path):
    host = FakeHost()
    report = launch_services(host, ComposeCommand.integrated(), tmp_path, GPU)

    assert host.compose_ups == [["docker", "compose", "up", "-d"]]
    assert report.logs_command == "docker compose logs -f"
    assert report.status_command == "docker compose ps"
    assert report.stop_command == "docker compose down"
    assert report.shell_command == "docker exec -it pico-proving-service-gpu bash"
    lines = report.render()
    assert "  - pico-proving-service-gpu (GPU proving)" in lines
    assert "  - pico-gnark-server (on-chain proofs)" in lines


def test_launch_failure_hints_at_logs(tmp_path):
    host = FakeHost(compose_rc=1)
    with pytest.raises(OrchestrationFailed) as exc:
        launch_services(host, ComposeCommand.standalone(), tmp_path, CPU)
    assert "docker-compose logs" in exc.value.hint
