"""French amount-in-words for the "ARRETEE LA PRESENTE FACTURE A LA SOMME DE" line.

Two modes:

- ``general``: full French numeral spelling (traditional hyphenation) of the
  integer part, with cents appended as "ET <n> CENTIMES".
- ``legacy``: only 0, 1200 and 1500 are spelled out; every other amount is
  printed as a plain numeral.

Both modes return the words without the currency; callers append it.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

logger = logging.getLogger(__name__)

GENERAL = "general"
LEGACY = "legacy"
MODES = (GENERAL, LEGACY)

_UNITS = [
    "ZERO", "UN", "DEUX", "TROIS", "QUATRE", "CINQ", "SIX", "SEPT", "HUIT", "NEUF",
    "DIX", "ONZE", "DOUZE", "TREIZE", "QUATORZE", "QUINZE", "SEIZE",
]
_TENS = {
    2: "VINGT", 3: "TRENTE", 4: "QUARANTE", 5: "CINQUANTE", 6: "SOIXANTE",
    8: "QUATRE-VINGT",
}
_SCALES = [
    (10 ** 9, "MILLIARD"),
    (10 ** 6, "MILLION"),
]
_LEGACY_WORDS = {
    Decimal("0"): "ZERO",
    Decimal("1200"): "MILLE DEUX CENTS",
    Decimal("1500"): "MILLE CINQ CENTS",
}
MAX_AMOUNT = 10 ** 12 - 1


def _below_100(n: int, plural: bool = True) -> str:
    if n < 17:
        return _UNITS[n]
    if n < 20:
        return f"DIX-{_UNITS[n - 10]}"

    tens, unit = divmod(n, 10)
    if tens in (7, 9):
        # 70-79 and 90-99 are built on 60 and 80 plus 10-19
        base = _TENS[tens - 1]
        if tens == 7 and unit == 1:
            return f"{base} ET ONZE"
        return f"{base}-{_below_100(10 + unit)}"
    if tens == 8:
        if unit == 0:
            return "QUATRE-VINGTS" if plural else "QUATRE-VINGT"
        return f"QUATRE-VINGT-{_UNITS[unit]}"

    word = _TENS[tens]
    if unit == 0:
        return word
    if unit == 1:
        return f"{word} ET UN"
    return f"{word}-{_UNITS[unit]}"


def _below_1000(n: int, plural: bool = True) -> str:
    hundreds, rest = divmod(n, 100)
    parts = []
    if hundreds == 1:
        parts.append("CENT")
    elif hundreds > 1:
        suffix = "S" if rest == 0 and plural else ""
        parts.append(f"{_UNITS[hundreds]} CENT{suffix}")
    if rest or not parts:
        parts.append(_below_100(rest, plural))
    return " ".join(parts)


def integer_to_words(n: int) -> str:
    """Spell a non-negative integer in French capitals."""
    if n < 0 or n > MAX_AMOUNT:
        raise ValueError(f"Amount out of range for words: {n}")
    if n == 0:
        return "ZERO"

    parts = []
    for scale, name in _SCALES:
        count, n = divmod(n, scale)
        if count:
            plural = "S" if count > 1 else ""
            parts.append(f"{_below_1000(count)} {name}{plural}")

    thousands, n = divmod(n, 1000)
    if thousands == 1:
        parts.append("MILLE")
    elif thousands > 1:
        # "mille" is invariable and stops the plural of cent / quatre-vingt
        parts.append(f"{_below_1000(thousands, plural=False)} MILLE")

    if n:
        parts.append(_below_1000(n))
    return " ".join(parts)


def _legacy(amount: Decimal) -> str:
    words = _LEGACY_WORDS.get(amount)
    if words is not None:
        return words
    return format(amount.normalize(), "f")


def amount_to_words(amount: Union[Decimal, int, float], mode: str = GENERAL) -> str:
    """Amount in French words, without the currency name.

    Args:
        amount: Non-negative amount
        mode: ``general`` (full spelling) or ``legacy`` (three fixed amounts,
            numeral otherwise)

    Returns:
        Uppercase words, e.g. "MILLE CINQ CENTS"
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if value < 0:
        raise ValueError(f"Amount must be >= 0, got {amount}")

    if mode == LEGACY:
        return _legacy(value)
    if mode != GENERAL:
        raise ValueError(f"Unknown amount-in-words mode: {mode!r} (expected one of {MODES})")

    euros = int(value)
    cents = int((value - euros) * 100)
    words = integer_to_words(euros)
    if cents:
        unit = "CENTIME" if cents == 1 else "CENTIMES"
        words += f" ET {_below_100(cents)} {unit}"
    return words
