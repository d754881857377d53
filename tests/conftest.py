"""Shared fixtures for pico-deploy tests."""

import logging
import os
import subprocess
from pathlib import Path

import pytest

from pico_deploy.config import BootstrapConfig, reset_config

TEMPLATE_TEXT = "GRPC_ADDR=[::]:50052\nPROVER_COUNT=2\nRUST_LOG=info\nVK_VERIFICATION=true\n"


class FakeHost:
    """Stands in for HostTools: records every command, writes fake downloads."""

    def __init__(
        self,
        tools=("docker", "docker-compose", "curl"),
        plugin=True,
        compose_rc=0,
        fail_urls=(),
        payload=b"gnark-bytes",
    ):
        self.tools = set(tools)
        self.plugin = plugin
        self.compose_rc = compose_rc
        self.fail_urls = set(fail_urls)
        self.payload = payload
        self.calls = []

    def which(self, name):
        return f"/usr/bin/{name}" if name in self.tools else None

    def run(self, cmd, cwd=None, capture=True, timeout=None):
        cmd = list(cmd)
        self.calls.append(cmd)
        rc = 0
        if cmd[:3] == ["docker", "compose", "version"]:
            rc = 0 if self.plugin else 1
        elif cmd[0] in ("curl", "wget"):
            url = cmd[-1]
            flag = "-o" if cmd[0] == "curl" else "-O"
            target = Path(cmd[cmd.index(flag) + 1])
            if url in self.fail_urls:
                rc = 22
            else:
                target.write_bytes(self.payload)
        elif cmd[-2:] == ["up", "-d"]:
            rc = self.compose_rc
        return subprocess.CompletedProcess(cmd, rc, "", "")

    @property
    def transfers(self):
        return [c for c in self.calls if c[0] in ("curl", "wget")]

    @property
    def compose_ups(self):
        return [c for c in self.calls if c[-2:] == ["up", "-d"]]


class FakeRuntime:
    """Stands in for DockerRuntime."""

    def __init__(self, images=(), runtimes=("runc", "nvidia"), gpu_ok=True, running=()):
        self.images = set(images)
        self._runtimes = {name: {} for name in runtimes}
        self.gpu_ok = gpu_ok
        self._running = set(running)
        self.probes = []

    def has_image(self, name):
        return name in self.images

    def runtimes(self):
        return self._runtimes

    def probe_gpu(self, image, command):
        self.probes.append((image, command))
        return self.gpu_ok

    def container_state(self, name):
        return "running" if name in self._running else None

    def running(self, names):
        return all(n in self._running for n in names)


class RecordingConfirmer:
    """Answers from a fixed script and remembers the prompts."""

    def __init__(self, answer=True):
        self.answer = answer
        self.prompts = []
        self.defaults = []

    def confirm(self, prompt, default=False):
        self.prompts.append(prompt)
        self.defaults.append(default)
        return self.answer

    def __call__(self, prompt, default=False):
        return self.confirm(prompt, default=default)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep PICO_DEPLOY_* variables from the developer's shell out of tests,
    and undo any root logger changes made by setup_logging."""
    for key in list(os.environ):
        if key.startswith("PICO_DEPLOY_"):
            monkeypatch.delenv(key)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    reset_config()
    yield
    reset_config()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def deploy_dir(tmp_path):
    """A deployment directory holding only env.example, like a fresh release."""
    d = tmp_path / "deploy"
    d.mkdir()
    (d / "env.example").write_text(TEMPLATE_TEXT)
    return d


@pytest.fixture
def config(deploy_dir):
    return BootstrapConfig(deploy_dir=deploy_dir)


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def confirm():
    return RecordingConfirmer(answer=True)
