"""Row formatter: VolumeReport -> one fixed-width line of the df table."""

from decimal import ROUND_HALF_UP, Decimal, localcontext

from .schema import VolumeReport

HEADER = "Drive Type     Total    Used    Free    % ValumeName"
SEPARATOR = "----- ------ ------- ------- ------- ---- ----------"

# Shared by ready and unready rows; an unready row puts "-" in every size column.
_COLUMNS = "{letter:<5} {kind:<6} {total:>7} {used:>7} {free:>7} {usage:>4}"
_PLACEHOLDER = "-"

_GIB = Decimal(1024 ** 3)
_CENT = Decimal("0.01")


def to_gigabytes(n: int) -> Decimal:
    """Binary gigabytes, 2 decimals, ties rounded away from zero (2.125 -> 2.13)."""
    with localcontext() as ctx:
        ctx.prec = 50
        return (Decimal(n) / _GIB).quantize(_CENT, rounding=ROUND_HALF_UP)


def format_gigabytes(n: int) -> str:
    """476.00 -> "476GB", 1.50 -> "1.5GB"."""
    text = format(to_gigabytes(n), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}GB"


def format_row(report: VolumeReport) -> str:
    capacity = report.capacity
    if capacity is None:
        return _COLUMNS.format(
            letter=report.letter,
            kind=report.volume_type.value,
            total=_PLACEHOLDER,
            used=_PLACEHOLDER,
            free=_PLACEHOLDER,
            usage=_PLACEHOLDER,
        )
    columns = _COLUMNS.format(
        letter=report.letter,
        kind=report.volume_type.value,
        total=format_gigabytes(capacity.total_bytes),
        used=format_gigabytes(capacity.used_bytes),
        free=format_gigabytes(capacity.free_bytes),
        usage=f"{capacity.usage_percent}%",
    )
    return f"{columns} {capacity.label}"
