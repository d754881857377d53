"""Tests for the .env bootstrap and validation."""

import pytest

from conftest import TEMPLATE_TEXT, RecordingConfirmer
from pico_deploy.confirm import InteractiveConfirmer
from pico_deploy.environment import ensure_environment, load_environment
from pico_deploy.errors import InvalidConfiguration, MissingTemplate, OperatorAborted


def test_creates_env_from_template(deploy_dir, confirm):
    created = ensure_environment(deploy_dir, confirm)

    assert created is True
    assert (deploy_dir / ".env").read_text() == TEMPLATE_TEXT
    assert len(confirm.prompts) == 1
    assert confirm.defaults == [True]


def test_existing_env_is_never_overwritten(deploy_dir, confirm):
    env = deploy_dir / ".env"
    env.write_text("PROVER_COUNT=8\n# operator edit\n")

    assert ensure_environment(deploy_dir, confirm) is False
    assert env.read_text() == "PROVER_COUNT=8\n# operator edit\n"
    assert confirm.prompts == []


def test_existing_env_without_template_is_fine(tmp_path, confirm):
    (tmp_path / ".env").write_text("RUST_LOG=debug\n")
    assert ensure_environment(tmp_path, confirm) is False


def test_missing_template(tmp_path, confirm):
    with pytest.raises(MissingTemplate):
        ensure_environment(tmp_path, confirm)
    assert not (tmp_path / ".env").exists()


def test_declined_review_keeps_file(deploy_dir):
    """Declining stops the run but the next run must not pause again."""
    decline = RecordingConfirmer(answer=False)
    with pytest.raises(OperatorAborted):
        ensure_environment(deploy_dir, decline)

    assert (deploy_dir / ".env").exists()
    assert ensure_environment(deploy_dir, decline) is False
    assert len(decline.prompts) == 1


def test_load_environment_parses_known_keys(tmp_path):
    env = tmp_path / ".env"
    env.write_text(
        "GRPC_ADDR=0.0.0.0:6000\nPROVER_COUNT=4\nCHUNK_SIZE=\n"
        "VK_VERIFICATION=false\nEXTRA_FLAG=1\n"
    )
    settings = load_environment(env)

    assert settings.grpc_addr == "0.0.0.0:6000"
    assert settings.grpc_port == 6000
    assert settings.prover_count == 4
    assert settings.chunk_size is None
    assert settings.vk_verification is False
    assert settings.model_extra["EXTRA_FLAG"] == "1"


def test_review_pause_defaults_to_continue(deploy_dir):
    """Pressing enter at the review pause keeps going."""
    confirmer = InteractiveConfirmer(lambda prompt: "")
    assert ensure_environment(deploy_dir, confirmer) is True


def test_ipv6_grpc_addr_port(tmp_path):
    env = tmp_path / ".env"
    env.write_text("GRPC_ADDR=[::]:6000\n")
    assert load_environment(env).grpc_port == 6000


def test_load_environment_rejects_bad_values(tmp_path):
    env = tmp_path / ".env"
    env.write_text("PROVER_COUNT=many\n")
    with pytest.raises(InvalidConfiguration, match="PROVER_COUNT"):
        load_environment(env)


def test_load_environment_rejects_addr_without_port(tmp_path):
    env = tmp_path / ".env"
    env.write_text("GRPC_ADDR=localhost\n")
    with pytest.raises(InvalidConfiguration, match="GRPC_ADDR"):
        load_environment(env)
