"""Name/type extraction from free-text address labels.

Labels in imported data mix casing, underscores, parentheses and embedded
account numbers: ``"Timo_ledger"``, ``"Mihailo hot wallet"``,
``"Timo (Ledger)"``, ``"TimoLedger"``, ``"Manoj Account1"``. Only one type
is taken from a label; keywords are tried in a fixed order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

ACCOUNT_PREFIX = "Account "


def _keyword(pattern: str) -> re.Pattern[str]:
    """Match ``pattern`` as a word, or glued on in camelCase ("TimoLedger").

    A keyword inside a lower-case word ("Ledgerwood") does not match.
    """
    head, tail = pattern[0], pattern[1:]
    return re.compile(
        rf"(?:(?<![A-Za-z0-9])(?i:{head})|(?<=[a-z]){head.upper()})(?i:{tail})(?![a-z])"
    )


# (display type, pattern) in priority order. A None type means "Account N".
KEYWORDS: tuple[tuple[str | None, re.Pattern[str]], ...] = (
    ("Hot Wallet", _keyword(r"hot[\s_-]*wallet")),
    ("Hardware Wallet", _keyword(r"hardware[\s_-]*wallet")),
    ("Ledger", _keyword(r"ledger")),
    (None, _keyword(r"account[\s_#-]*(\d+)")),
    ("Operator", _keyword(r"operator")),
    ("Proposer", _keyword(r"proposer")),
)

_EMPTY_BRACKETS_RE = re.compile(r"\(\s*\)|\[\s*\]|\{\s*\}")
_WHITESPACE_RE = re.compile(r"\s+")
_EDGE_SEPARATORS = " -_.,:;/|"


@dataclass(frozen=True)
class Extraction:
    name: str
    type: str | None = None

    @property
    def is_account(self) -> bool:
        return is_account_type(self.type)


def is_account_type(display_type: str | None) -> bool:
    return bool(display_type) and display_type.startswith(ACCOUNT_PREFIX)


def clean_name(text: str) -> str:
    """Collapse separators; return "" when nothing alphanumeric is left."""
    text = text.replace("_", " ")
    previous = None
    while previous != text:
        previous = text
        text = _EMPTY_BRACKETS_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text).strip(_EDGE_SEPARATORS)
    if not any(ch.isalnum() for ch in text):
        return ""
    return text


def extract_name_and_type(full_name: str | None) -> Extraction:
    """Split a label into a cleaned name and an optional account type.

    Examples:
        "Timo_ledger"        -> Extraction("Timo", "Ledger")
        "Mihailo hot wallet" -> Extraction("Mihailo", "Hot Wallet")
        "Manoj Account_2"    -> Extraction("Manoj", "Account 2")
        "Treasury"           -> Extraction("Treasury", None)
    """
    if full_name is None:
        return Extraction(name="")
    text = str(full_name).strip()

    for display_type, pattern in KEYWORDS:
        match = pattern.search(text)
        if match is None:
            continue
        if display_type is None:
            display_type = f"{ACCOUNT_PREFIX}{match.group(1).lstrip('0') or '0'}"
        remainder = text[: match.start()] + " " + text[match.end():]
        return Extraction(name=clean_name(remainder), type=display_type)

    return Extraction(name=clean_name(text))
