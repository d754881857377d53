"""
Operator confirmation policies.

Stages never read stdin themselves; they call ``confirm(prompt) -> bool``
on whichever Confirmer the run was started with.
"""

import logging
from typing import Callable, Optional

from .errors import ConfirmationRequired

logger = logging.getLogger("PICO.Deploy.Confirm")

YES_ANSWERS = frozenset({"y", "yes"})


class Confirmer:
    """Answers yes/no questions on behalf of the operator."""

    def confirm(self, prompt: str, default: bool = False) -> bool:
        raise NotImplementedError

    def __call__(self, prompt: str, default: bool = False) -> bool:
        return self.confirm(prompt, default=default)


class InteractiveConfirmer(Confirmer):
    """Asks on the terminal.

    An empty reply takes the question's default. Otherwise anything but
    y/yes is a decline, as is EOF.
    """

    def __init__(self, input_fn: Callable[[str], str] = input):
        self._input = input_fn

    def confirm(self, prompt: str, default: bool = False) -> bool:
        choices = "[Y/n]" if default else "(y/N)"
        try:
            reply = self._input(f"{prompt} {choices} ")
        except EOFError:
            print()
            return False
        reply = reply.strip().lower()
        if not reply:
            return default
        return reply in YES_ANSWERS


class FixedConfirmer(Confirmer):
    """Always gives the same answer (for --yes / --no)."""

    def __init__(self, answer: bool):
        self.answer = answer

    def confirm(self, prompt: str, default: bool = False) -> bool:
        logger.info("%s -> %s (non-interactive)", prompt, "yes" if self.answer else "no")
        return self.answer


class StrictConfirmer(Confirmer):
    """Fails the run if any question is asked."""

    def confirm(self, prompt: str, default: bool = False) -> bool:
        raise ConfirmationRequired(
            f"Operator confirmation required: {prompt}",
            hint="Re-run interactively, or pass --yes / --no to answer automatically",
        )


def confirmer_for(assume: Optional[str]) -> Confirmer:
    """Pick a Confirmer from an ``assume`` setting (yes, no, fail or None)."""
    if assume is None:
        return InteractiveConfirmer()
    value = assume.strip().lower()
    if value in ("yes", "y", "true", "1"):
        return FixedConfirmer(True)
    if value in ("no", "n", "false", "0"):
        return FixedConfirmer(False)
    if value in ("fail", "strict", "never"):
        return StrictConfirmer()
    raise ValueError(f"Unknown confirmation policy: {assume!r} (expected yes, no or fail)")
