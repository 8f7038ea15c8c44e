"""Volume analyzer: one VolumeReport per volume the OS exposes, in OS order."""

import os
import sys
from typing import Callable, List, Optional

from .schema import LETTER_WIDTH, Capacity, VolumeReport
from .source import PsutilVolumeSource, RawVolume, VolumeSource, classify, default_namer, looks_unready

_DEBUG = bool(os.environ.get("DFREPORT_DEBUG", ""))


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[dfreport] analyzer: {msg}", file=sys.stderr)


class VolumeEnumerationError(RuntimeError):
    """The OS volume list itself could not be read."""


def _capacity(volume: RawVolume, source: VolumeSource) -> Optional[Capacity]:
    """Read size and label. None means not ready; per-volume faults count as not ready."""
    if looks_unready(volume):
        _debug(f"{volume.mountpoint}: no medium")
        return None
    try:
        total, free = source.usage(volume.mountpoint)
    except OSError as e:
        _debug(f"{volume.mountpoint}: not ready ({e})")
        return None
    try:
        label = source.label(volume)
    except OSError as e:
        _debug(f"{volume.mountpoint}: label unreadable ({e})")
        label = ""
    return Capacity(total_bytes=total, free_bytes=free, label=label or "")


def analyze(
    source: Optional[VolumeSource] = None,
    namer: Optional[Callable[[str], str]] = None,
) -> List[VolumeReport]:
    """Query every volume once, sequentially. No filtering, no sorting."""
    if source is None:
        source = PsutilVolumeSource()
    if namer is None:
        namer = default_namer()
    try:
        volumes = source.partitions()
    except OSError as e:
        raise VolumeEnumerationError(f"cannot list volumes: {e}") from e

    reports = []
    for volume in volumes:
        reports.append(
            VolumeReport(
                letter=namer(volume.mountpoint or volume.device)[:LETTER_WIDTH],
                volume_type=classify(volume),
                capacity=_capacity(volume, source),
            )
        )
    _debug(f"{len(reports)} volume(s), {sum(r.is_ready for r in reports)} ready")
    return reports
