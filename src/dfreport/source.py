"""
Volume enumeration boundary.

The analyzer never calls psutil directly. It uses the provided VolumeSource
so that tests can inject fixture volumes instead of reading the real host.
"""

import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Tuple

import psutil

from .schema import LETTER_WIDTH, VolumeType

_DEBUG = bool(os.environ.get("DFREPORT_DEBUG", ""))

BY_LABEL_DIR = Path("/dev/disk/by-label")

# Drive kinds psutil appends to opts on Windows ("rw,fixed", "cdrom", ...).
# A DRIVE_NO_ROOT_DIR drive gets no kind token and is classified by fstype
# below; NO_ROOT_DIRECTORY only comes from injected sources.
_WINDOWS_KINDS = {
    "fixed": VolumeType.FIXED,
    "removable": VolumeType.REMOVABLE,
    "cdrom": VolumeType.CDROM,
    "remote": VolumeType.NETWORK,
    "ramdisk": VolumeType.RAM,
    "unknown": VolumeType.UNKNOWN,
}

_NETWORK_FS = {
    "nfs", "nfs4", "cifs", "smbfs", "smb3", "sshfs", "fuse.sshfs", "afpfs",
    "9p", "ceph", "glusterfs", "fuse.glusterfs", "davfs", "webdav",
}
_OPTICAL_FS = {"iso9660", "udf", "cd9660"}
_RAM_FS = {"tmpfs", "ramfs", "devtmpfs"}
_REMOVABLE_FS = {"vfat", "exfat", "msdos", "ntfs", "fuseblk"}
_REMOVABLE_ROOTS = ("/media/", "/run/media/")

_UDEV_ESCAPE = re.compile(r"\\x([0-9a-fA-F]{2})")


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[dfreport] source: {msg}", file=sys.stderr)


@dataclass
class RawVolume:
    """One entry of the OS volume list, as psutil reports it."""

    device: str
    mountpoint: str
    fstype: str = ""
    opts: str = ""


class VolumeSource(Protocol):
    """Protocol for volume enumeration. Implementations may query the OS or serve fixtures."""

    def partitions(self) -> List[RawVolume]:
        """Every volume the OS exposes, in OS order."""
        ...

    def usage(self, mountpoint: str) -> Tuple[int, int]:
        """(total_bytes, free_bytes). Raises OSError when the medium is not accessible."""
        ...

    def label(self, volume: RawVolume) -> str:
        """Volume name; may be empty. Raises OSError when it cannot be read."""
        ...


def _opts_tokens(volume: RawVolume) -> List[str]:
    return [t.strip().lower() for t in volume.opts.split(",") if t.strip()]


def classify(volume: RawVolume) -> VolumeType:
    """Map a raw volume to its kind: Windows drive kind from opts, else by filesystem type."""
    for token in _opts_tokens(volume):
        if token in _WINDOWS_KINDS:
            return _WINDOWS_KINDS[token]
    fstype = volume.fstype.lower()
    if not fstype:
        return VolumeType.UNKNOWN
    if fstype in _NETWORK_FS or fstype.startswith("nfs"):
        return VolumeType.NETWORK
    if fstype in _OPTICAL_FS:
        return VolumeType.CDROM
    if fstype in _RAM_FS:
        return VolumeType.RAM
    if fstype in _REMOVABLE_FS and volume.mountpoint.startswith(_REMOVABLE_ROOTS):
        return VolumeType.REMOVABLE
    return VolumeType.FIXED


def looks_unready(volume: RawVolume) -> bool:
    """
    Windows drive with no filesystem: no medium in it.

    disk_usage on such a drive may raise, pop up a GUI error or hang, so it
    is never called.
    """
    has_drive_kind = any(t in _WINDOWS_KINDS for t in _opts_tokens(volume))
    return has_drive_kind and not volume.fstype


# --- Display names ---


def drive_letter(mountpoint: str) -> str:
    """Windows convention: "C:\\" -> "C:"."""
    return mountpoint[:2]


def mount_name(mountpoint: str) -> str:
    """POSIX mount points have no letter; show the last path component, "/" for the root."""
    name = os.path.basename(mountpoint.rstrip("/")) or mountpoint[:1]
    return name[:LETTER_WIDTH]


def default_namer() -> Callable[[str], str]:
    return drive_letter if os.name == "nt" else mount_name


# --- Labels ---


def _windows_label(root: str) -> str:
    import ctypes
    name = ctypes.create_unicode_buffer(261)
    ok = ctypes.windll.kernel32.GetVolumeInformationW(
        ctypes.c_wchar_p(root), name, len(name), None, None, None, None, 0
    )
    if not ok:
        raise ctypes.WinError()
    return name.value


def _by_label(device: str, by_label_dir: Path) -> str:
    """Find the udev by-label symlink pointing at device."""
    if not device.startswith("/") or not by_label_dir.is_dir():
        return ""
    target = os.path.realpath(device)
    for link in sorted(by_label_dir.iterdir()):
        if os.path.realpath(link) == target:
            return _UDEV_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), link.name)
    return ""


class PsutilVolumeSource:
    """Default implementation: the host's volumes via psutil."""

    def __init__(self, by_label_dir: Optional[Path] = None):
        self.by_label_dir = Path(by_label_dir) if by_label_dir is not None else BY_LABEL_DIR

    def partitions(self) -> List[RawVolume]:
        return [
            RawVolume(device=p.device, mountpoint=p.mountpoint, fstype=p.fstype, opts=p.opts)
            for p in psutil.disk_partitions(all=True)
        ]

    def usage(self, mountpoint: str) -> Tuple[int, int]:
        u = psutil.disk_usage(mountpoint)
        # psutil's free is what an unprivileged user may use; report every
        # unused byte so that used + free == total.
        return int(u.total), int(u.total) - int(u.used)

    def label(self, volume: RawVolume) -> str:
        if os.name == "nt":
            return _windows_label(volume.mountpoint)
        if sys.platform == "darwin":
            if volume.mountpoint.startswith("/Volumes/"):
                return os.path.basename(volume.mountpoint.rstrip("/"))
            return ""
        try:
            return _by_label(volume.device, self.by_label_dir)
        except OSError as e:
            _debug(f"by-label lookup for {volume.device} failed: {e}")
            return ""
