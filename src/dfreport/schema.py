"""
Volume report schema.

Strongly typed contract between the analyzer and the formatter.
The analyzer produces one VolumeReport per volume; the formatter consumes it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

LETTER_WIDTH = 5


class VolumeType(str, Enum):
    """Volume kind as classified by the OS. Values are the display text."""

    FIXED = "Fixed"
    REMOVABLE = "Removable"
    NETWORK = "Network"
    CDROM = "CDRom"
    RAM = "Ram"
    UNKNOWN = "Unknown"
    NO_ROOT_DIRECTORY = "NoRootDirectory"


class Capacity(BaseModel):
    """Size data of a ready volume. Only exists when the medium is accessible."""

    total_bytes: int = Field(ge=0)
    free_bytes: int = Field(ge=0)
    label: str = ""

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def used_bytes(self) -> int:
        return self.total_bytes - self.free_bytes

    @property
    def usage_percent(self) -> int:
        """Truncated, never rounded: 49.99% is 49."""
        if self.total_bytes == 0:
            return 0
        return self.used_bytes * 100 // self.total_bytes


class VolumeReport(BaseModel):
    """
    One row of the report.

    capacity is None for a volume with no accessible medium (empty optical
    drive, vanished device); such a report only carries letter and type.
    """

    letter: str = Field(max_length=LETTER_WIDTH)
    volume_type: VolumeType = VolumeType.UNKNOWN
    capacity: Optional[Capacity] = None

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def is_ready(self) -> bool:
        return self.capacity is not None
