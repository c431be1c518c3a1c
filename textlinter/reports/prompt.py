"""Input and output contract of the external proofreading step.

The proofreading itself is done by an outside agent.  This module only fixes
what that agent is given (:func:`build_prompt`) and how its answer is read
back (:func:`parse_corrections`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

NO_CORRECTIONS_REPLY = "No corrections needed."

PROOFREADING_INSTRUCTIONS = f"""\
Check the text below for typos and misspellings and point out only the places
that contain a problem.

Report each problem in exactly this format:
- Position: [the surrounding context of the problem]
- Error: [the incorrect part]
- Suggestion: [the corrected form]
- Reason: [why it should be corrected]

If there is nothing to correct, answer only "{NO_CORRECTIONS_REPLY}"

Notes:
- The text may be in English or Japanese.
- Only point out clear typos and misspellings, not matters of style or wording.
- Typos, spelling mistakes and obvious grammatical errors are in scope."""


@dataclass(frozen=True)
class Correction:
    """One problem reported by the proofreading agent."""

    position: str
    error: str
    suggestion: str
    reason: str


def build_prompt(text: str) -> str:
    """Return the full proofreading request for *text*."""
    return f"{PROOFREADING_INSTRUCTIONS}\n\nText to check:\n\n{text}\n"


_CORRECTION_RE = re.compile(
    r"^\s*-\s*Position:\s*(?P<position>.*?)\s*\n"
    r"\s*-\s*Error:\s*(?P<error>.*?)\s*\n"
    r"\s*-\s*Suggestion:\s*(?P<suggestion>.*?)\s*\n"
    r"\s*-\s*Reason:\s*(?P<reason>.*?)\s*$",
    re.MULTILINE | re.IGNORECASE,
)


def parse_corrections(reply: str) -> list[Correction]:
    """Parse the correction blocks of an agent *reply*.

    A reply without any complete Position/Error/Suggestion/Reason block
    (including :data:`NO_CORRECTIONS_REPLY`) yields an empty list.
    """
    return [
        Correction(
            position=m.group("position"),
            error=m.group("error"),
            suggestion=m.group("suggestion"),
            reason=m.group("reason"),
        )
        for m in _CORRECTION_RE.finditer(reply)
    ]
