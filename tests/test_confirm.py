"""Tests for confirmation policies."""

import pytest

from pico_deploy.confirm import (
    FixedConfirmer,
    InteractiveConfirmer,
    StrictConfirmer,
    confirmer_for,
)
from pico_deploy.errors import ConfirmationRequired


@pytest.mark.parametrize("reply,expected", [
    ("y", True),
    ("YES", True),
    (" y ", True),
    ("", False),
    ("n", False),
    ("sure", False),
])
def test_interactive_answers(reply, expected):
    asked = []

    def fake_input(prompt):
        asked.append(prompt)
        return reply

    assert InteractiveConfirmer(fake_input).confirm("Download?") is expected
    assert asked == ["Download? (y/N) "]


def test_interactive_eof_declines():
    def closed_stdin(prompt):
        raise EOFError

    assert InteractiveConfirmer(closed_stdin)("Continue anyway?") is False


@pytest.mark.parametrize("reply,expected", [
    ("", True),
    ("  ", True),
    ("y", True),
    ("n", False),
    ("no", False),
])
def test_interactive_default_yes(reply, expected):
    asked = []

    def fake_input(prompt):
        asked.append(prompt)
        return reply

    confirmer = InteractiveConfirmer(fake_input)
    assert confirmer("Continue with the settings in .env?", default=True) is expected
    assert asked == ["Continue with the settings in .env? [Y/n] "]


def test_fixed_policies():
    assert FixedConfirmer(True)("anything") is True
    assert FixedConfirmer(False)("anything") is False
    assert FixedConfirmer(False)("anything", default=True) is False


def test_strict_policy_raises():
    with pytest.raises(ConfirmationRequired, match="Continue anyway"):
        StrictConfirmer()("Continue anyway?")


def test_confirmer_for():
    assert isinstance(confirmer_for(None), InteractiveConfirmer)
    assert confirmer_for("yes").answer is True
    assert confirmer_for("No").answer is False
    assert isinstance(confirmer_for("fail"), StrictConfirmer)
    with pytest.raises(ValueError):
        confirmer_for("maybe")
