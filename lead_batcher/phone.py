"""Strict Indian mobile number normalisation.

Every accepted number is rewritten to the canonical ``91XXXXXXXXXX`` form
(twelve digits, country code first). The rules are:

* strip everything that is not a digit;
* ten digits get the ``91`` country code prepended;
* eleven digits with a leading ``0`` lose the ``0`` and gain ``91``;
* twelve digits already starting with ``91`` are kept as is;
* the result must match ``^91[6-9][0-9]{9}$``.
"""
from __future__ import annotations

import math
import re
from typing import Any, List

from .models import NormalizedPhone, PhoneOutcome, PhoneRejection, RejectionReason

COUNTRY_CODE = "91"

_NON_DIGITS = re.compile(r"[^0-9]")
_CANDIDATE_DELIMITERS = re.compile(r"[,/|&\n]+")
_MOBILE_PATTERN = re.compile(rf"^{COUNTRY_CODE}[6-9][0-9]{{9}}$")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def normalize_phone(raw: Any) -> PhoneOutcome:
    """Return the canonical form of ``raw`` or the reason it was rejected."""

    if _is_blank(raw):
        return PhoneRejection(reason=RejectionReason.EMPTY_VALUE, original=raw)

    digits = _NON_DIGITS.sub("", str(raw))

    if len(digits) == 10:
        digits = COUNTRY_CODE + digits
    elif len(digits) == 11 and digits.startswith("0"):
        digits = COUNTRY_CODE + digits[1:]
    elif len(digits) == 12 and digits.startswith(COUNTRY_CODE):
        pass
    else:
        return PhoneRejection(reason=RejectionReason.INVALID_LENGTH_OR_FORMAT, original=raw)

    if not _MOBILE_PATTERN.match(digits):
        return PhoneRejection(reason=RejectionReason.INVALID_PATTERN, original=raw)

    return NormalizedPhone(canonical=digits)


def split_candidates(raw: Any) -> List[str]:
    """Split a phone cell holding several numbers into trimmed candidates."""

    return [candidate.strip() for candidate in _CANDIDATE_DELIMITERS.split(str(raw))]


def first_valid_phone(raw: Any) -> PhoneOutcome:
    """Normalise the candidates in ``raw`` left to right.

    Evaluation stops at the first candidate that normalises. When none does,
    the rejection of the last candidate tried is returned.
    """

    outcome: PhoneOutcome = PhoneRejection(reason=RejectionReason.EMPTY_VALUE, original=raw)
    for candidate in split_candidates(raw):
        outcome = normalize_phone(candidate)
        if isinstance(outcome, NormalizedPhone):
            return outcome
    return outcome


__all__ = ["COUNTRY_CODE", "first_valid_phone", "normalize_phone", "split_candidates"]
