"""Tests for the image gate and data directory provisioning."""

import pytest

from conftest import FakeRuntime
from pico_deploy.directories import ensure_data_dir
from pico_deploy.errors import ImageNotLoaded
from pico_deploy.images import check_image
from pico_deploy.variants import CPU, GPU


def test_image_present():
    check_image(FakeRuntime(images={CPU.image}), CPU)


def test_image_missing_points_at_docker_load():
    with pytest.raises(ImageNotLoaded) as exc:
        check_image(FakeRuntime(images={CPU.image}), GPU)
    assert "docker load -i pico-proving-service-gpu.tar" in exc.value.hint


def test_data_dir_created_with_parents(tmp_path):
    target = tmp_path / "a" / "b" / "data"
    resolved = ensure_data_dir(target)
    assert target.is_dir()
    assert resolved.is_absolute()


def test_data_dir_is_idempotent(tmp_path):
    target = tmp_path / "data"
    target.mkdir()
    (target / "pico_proving_service.db").write_bytes(b"db")
    assert ensure_data_dir(target) == target.resolve()
    assert (target / "pico_proving_service.db").read_bytes() == b"db"
