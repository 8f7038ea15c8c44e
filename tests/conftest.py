from typing import Dict, List, Optional, Tuple

import pytest

from dfreport.source import RawVolume

GIB = 1024 ** 3


class FixtureSource:
    """VolumeSource that serves fixture volumes instead of the real host."""

    def __init__(
        self,
        volumes: List[RawVolume],
        usage: Dict[str, Tuple[int, int]],
        labels: Optional[Dict[str, str]] = None,
    ):
        self.volumes = volumes
        self.usage_by_mount = usage
        self.labels = labels or {}
        self.usage_calls: List[str] = []

    def partitions(self) -> List[RawVolume]:
        return list(self.volumes)

    def usage(self, mountpoint: str) -> Tuple[int, int]:
        self.usage_calls.append(mountpoint)
        if mountpoint not in self.usage_by_mount:
            raise FileNotFoundError(2, "The device is not ready", mountpoint)
        return self.usage_by_mount[mountpoint]

    def label(self, volume: RawVolume) -> str:
        value = self.labels.get(volume.mountpoint, "")
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def windows_source() -> FixtureSource:
    """C: fixed disk, D: empty optical drive, Z: network share."""
    return FixtureSource(
        volumes=[
            RawVolume("C:\\", "C:\\", "NTFS", "rw,fixed"),
            RawVolume("D:\\", "D:\\", "", "cdrom"),
            RawVolume("Z:\\", "Z:\\", "NTFS", "rw,remote"),
        ],
        usage={
            "C:\\": (476 * GIB, 266 * GIB),
            "Z:\\": (2 * GIB, GIB // 2),
        },
        labels={"C:\\": "OS", "Z:\\": "share"},
    )


@pytest.fixture
def make_source():
    return FixtureSource
