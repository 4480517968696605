"""Amount codec: posting amount tokens to :class:`Amount` and back.

Parsing does not validate a number in the ledger sense. It splits the token
into one numeric run (digits, ``-``, ``.``, ``,``) and at most one commodity
run (any other non-space characters), drops thousands separators and records
how many digits follow the decimal point. Rendering is canonical:

- the magnitude is zero-padded to ``precision + 1`` digits before the point is
  inserted, so ``Amount(-5, 2)`` renders ``-0.05``;
- prefix symbols are followed by one space unless the amount is negative
  (``$ 10.00``, ``$-10.00``);
- suffix symbols keep the spacing seen in the source (``10 EUR``, ``10EUR``).

Grouping separators are not restored (``$1,234.50`` renders ``$ 1234.50``), so
only the codec's own output round-trips exactly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import AmountParseError
from .models import Amount, Currency

_NUMBER_CHARS = frozenset("0123456789-.,")
_STATUS_MARKERS = frozenset("!*")
# Cost (``@``/``@@``) and balance assertion (``=``/``==``) annotations.
_ANNOTATION_RE = re.compile(r"[@=]")


@dataclass(frozen=True, slots=True)
class _Run:
    numeric: bool
    start: int
    text: str

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def _is_number_component(ch: str) -> bool:
    return ch in _NUMBER_CHARS


def _scan_runs(token: str) -> list[_Run]:
    runs: list[_Run] = []
    i = 0
    n = len(token)
    while i < n:
        ch = token[i]
        if ch.isspace():
            i += 1
            continue
        start = i
        numeric = _is_number_component(ch)
        while i < n and not token[i].isspace() and _is_number_component(token[i]) == numeric:
            i += 1
        runs.append(_Run(numeric=numeric, start=start, text=token[start:i]))
    return runs


def _select_number(token: str, numbers: list[_Run]) -> _Run:
    if not numbers:
        raise AmountParseError(token, "no numeric part")
    if len(numbers) == 1:
        return numbers[0]
    # ``-$10``: a lone minus detached from its digits by the commodity.
    sign, digits = numbers[0], numbers[1]
    if len(numbers) == 2 and sign.text == "-" and not digits.text.startswith("-"):
        return _Run(numeric=True, start=digits.start, text=f"-{digits.text}")
    raise AmountParseError(token, "more than one number")


def parse_amount(token: str) -> Amount:
    """Parse an amount token such as ``$1,234.50``, ``-3 EUR`` or ``12``.

    Raises
    ------
    AmountParseError
        When the token has no numeric run, more than one number or commodity,
        or the digits do not form an integer once the decimal point is removed.
    """

    runs = _scan_runs(token)
    currencies = [r for r in runs if not r.numeric]
    if len(currencies) > 1:
        raise AmountParseError(token, "more than one commodity")
    number = _select_number(token, [r for r in runs if r.numeric])

    digits = number.text.replace(",", "").strip()
    point = digits.rfind(".")
    if point == -1:
        precision = 0
        mantissa_text = digits
    else:
        precision = len(digits) - point - 1
        mantissa_text = digits[:point] + digits[point + 1 :]
    try:
        mantissa = int(mantissa_text)
    except ValueError as exc:
        raise AmountParseError(token, "not a number") from exc

    currency: Currency | None = None
    if currencies:
        run = currencies[0]
        prepend = run.start < number.start
        # Number runs never contain spaces, so anything between the end of the
        # last numeric run and the symbol is whitespace.
        last_numeric_end = max(r.end for r in runs if r.numeric)
        spaced = not prepend and run.start > last_numeric_end
        currency = Currency(symbol=run.text, prepend=prepend, spaced=spaced)

    return Amount(mantissa=mantissa, precision=precision, currency=currency)


def render_amount(amount: Amount) -> str:
    """Render ``amount`` in canonical form (see module docstring)."""

    precision = amount.precision
    digits = str(abs(amount.mantissa)).rjust(precision + 1, "0")
    number = f"{digits[:-precision]}.{digits[-precision:]}" if precision > 0 else digits
    negative = amount.mantissa < 0
    if negative:
        number = f"-{number}"

    currency = amount.currency
    if currency is None:
        return number
    if currency.prepend:
        sep = "" if negative else " "
        return f"{currency.symbol}{sep}{number}"
    sep = " " if currency.spaced else ""
    return f"{number}{sep}{currency.symbol}"


def has_status(token: str) -> bool:
    """Return True for account fields such as ``* assets:cash`` or ``! expenses``."""

    return len(token) >= 2 and token[0] in _STATUS_MARKERS and token[1] == " "


def split_annotation(token: str) -> tuple[str, str]:
    """Split a posting amount field into ``(amount, annotation)``.

    The annotation starts at the first ``@`` or ``=`` and is returned with its
    whitespace collapsed; ``"10 AAPL @ $150"`` gives ``("10 AAPL", "@ $150")``.
    Either part may be empty.
    """

    m = _ANNOTATION_RE.search(token)
    if m is None:
        return token.strip(), ""
    return token[: m.start()].strip(), " ".join(token[m.start() :].split())


def render_amount_field(token: str) -> str:
    """Canonicalize a posting's amount field, keeping any annotation verbatim."""

    amount_token, annotation = split_annotation(token)
    parts: list[str] = []
    if amount_token:
        parts.append(render_amount(parse_amount(amount_token)))
    if annotation:
        parts.append(annotation)
    return " ".join(parts)


__all__ = [
    "parse_amount",
    "render_amount",
    "render_amount_field",
    "has_status",
    "split_annotation",
]
