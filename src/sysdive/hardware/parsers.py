"""Parsers for the text formats produced by system tools and sysfs."""

import json
import logging
import re
import shlex
from dataclasses import dataclass
from typing import Optional

from .models import DiskDevice, Display, GPUController, MemoryModule

logger = logging.getLogger(__name__)

# Values SMBIOS tables use for "nothing here"
_DMI_PLACEHOLDERS = {
    "",
    "unknown",
    "not specified",
    "not provided",
    "none",
    "to be filled by o.e.m.",
    "default string",
    "no module installed",
}

_SIZE_SUFFIXES = {"": 1, "K": 1024, "M": 1024**2, "G": 1024**3, "T": 1024**4}

_DMI_UNITS = {
    "bytes": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
    "tb": 1024**4,
}

# SMBIOS 3.x, table 17 (System Enclosure or Chassis Types)
CHASSIS_TYPES = {
    1: "Other",
    2: "Unknown",
    3: "Desktop",
    4: "Low Profile Desktop",
    5: "Pizza Box",
    6: "Mini Tower",
    7: "Tower",
    8: "Portable",
    9: "Laptop",
    10: "Notebook",
    11: "Hand Held",
    12: "Docking Station",
    13: "All in One",
    14: "Sub Notebook",
    15: "Space-Saving",
    16: "Lunch Box",
    17: "Main System Chassis",
    18: "Expansion Chassis",
    19: "SubChassis",
    20: "Bus Expansion Chassis",
    21: "Peripheral Chassis",
    22: "RAID Chassis",
    23: "Rack Mount Chassis",
    24: "Sealed-Case PC",
    25: "Multi-System Chassis",
    26: "Compact PCI",
    27: "Advanced TCA",
    28: "Blade",
    29: "Blade Enclosure",
    30: "Tablet",
    31: "Convertible",
    32: "Detachable",
    33: "IoT Gateway",
    34: "Embedded PC",
    35: "Mini PC",
    36: "Stick PC",
}

# USB-IF base class codes
USB_CLASSES = {
    0x01: "Audio",
    0x02: "Communications",
    0x03: "HID",
    0x05: "Physical",
    0x06: "Image",
    0x07: "Printer",
    0x08: "Storage",
    0x09: "Hub",
    0x0A: "CDC Data",
    0x0B: "Smart Card",
    0x0D: "Content Security",
    0x0E: "Video",
    0x0F: "Personal Healthcare",
    0x10: "Audio/Video",
    0x11: "Billboard",
    0xDC: "Diagnostic",
    0xE0: "Wireless",
    0xEF: "Miscellaneous",
    0xFE: "Application Specific",
    0xFF: "Vendor Specific",
}

CPU_VENDORS = {
    "GenuineIntel": "Intel",
    "AuthenticAMD": "AMD",
    "HygonGenuine": "Hygon",
    "CentaurHauls": "VIA",
    "Apple": "Apple",
}

DISPLAY_PCI_CLASSES = ("VGA compatible controller", "3D controller", "Display controller")
AUDIO_PCI_CLASSES = ("Audio device", "Multimedia audio controller")


@dataclass
class PCIDevice:
    slot: str
    device_class: str
    vendor: str
    device: str


def clean_value(value: Optional[str]) -> Optional[str]:
    """Strip a raw value and map SMBIOS placeholders to None."""
    if value is None:
        return None
    value = value.strip()
    if value.lower() in _DMI_PLACEHOLDERS:
        return None
    return value


def parse_size_string(text: Optional[str]) -> Optional[int]:
    """Parse sysfs cache sizes such as ``48K`` or ``2048K`` into bytes."""
    if not text:
        return None
    match = re.fullmatch(r"\s*(\d+)\s*([KMGT]?)i?B?\s*", text, re.IGNORECASE)
    if not match:
        return None
    return int(match.group(1)) * _SIZE_SUFFIXES[match.group(2).upper()]


def parse_dmi_quantity(text: Optional[str]) -> Optional[int]:
    """Parse dmidecode sizes like ``16 GB`` or ``8192 MB`` into bytes."""
    value = clean_value(text)
    if value is None:
        return None
    parts = value.split()
    if len(parts) != 2 or parts[1].lower() not in _DMI_UNITS:
        return None
    try:
        return int(parts[0]) * _DMI_UNITS[parts[1].lower()]
    except ValueError:
        return None


def _leading_number(text: Optional[str]) -> Optional[float]:
    value = clean_value(text)
    if value is None:
        return None
    match = re.match(r"([0-9]+(?:\.[0-9]+)?)", value)
    return float(match.group(1)) if match else None


def parse_dmidecode(text: str) -> list[dict[str, str]]:
    """Split dmidecode output into one ``key -> value`` dict per handle.

    Each dict also carries the structure title under ``_title``.
    Multi-line list values (deeper indentation) are skipped.
    """
    blocks: list[dict[str, str]] = []
    current: Optional[dict[str, str]] = None

    for line in text.splitlines():
        if line.startswith("Handle "):
            current = {}
            blocks.append(current)
            continue
        if current is None or not line.strip():
            continue
        if not line.startswith("\t"):
            current.setdefault("_title", line.strip())
            continue
        if line.startswith("\t\t"):
            continue
        key, sep, value = line.strip().partition(":")
        if sep:
            current[key.strip()] = value.strip()

    return blocks


def memory_modules_from_dmidecode(text: str) -> list[MemoryModule]:
    """Build memory modules from ``dmidecode -t memory`` output.

    Empty slots are skipped.
    """
    modules = []
    for block in parse_dmidecode(text):
        if block.get("_title") != "Memory Device":
            continue
        size = parse_dmi_quantity(block.get("Size"))
        if size is None:
            continue

        clock = _leading_number(
            block.get("Configured Memory Speed")
            or block.get("Configured Clock Speed")
            or block.get("Speed")
        )
        modules.append(
            MemoryModule(
                size=size,
                type=clean_value(block.get("Type")),
                clock_speed=int(clock) if clock is not None else None,
                manufacturer=clean_value(block.get("Manufacturer")),
                part_num=clean_value(block.get("Part Number")),
                voltage_configured=_leading_number(block.get("Configured Voltage")),
            )
        )
    return modules


def processor_socket_from_dmidecode(text: str) -> Optional[str]:
    """Return the socket of the first processor in ``dmidecode -t processor``."""
    for block in parse_dmidecode(text):
        if block.get("_title") != "Processor Information":
            continue
        upgrade = clean_value(block.get("Upgrade"))
        if upgrade and upgrade.lower() != "other":
            return upgrade.replace("Socket ", "", 1)
        return clean_value(block.get("Socket Designation"))
    return None


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip() in ("1", "true", "True")
    return bool(value)


def disks_from_lsblk(text: str) -> list[DiskDevice]:
    """Build disks from ``lsblk -J -b -d -o NAME,TYPE,TRAN,SIZE,VENDOR,MODEL,REV,SERIAL,ROTA``."""
    try:
        devices = json.loads(text).get("blockdevices", [])
    except (json.JSONDecodeError, AttributeError) as e:
        logger.debug(f"Unparsable lsblk output: {e}")
        return []

    disks = []
    for dev in devices:
        if dev.get("type") != "disk":
            continue

        tran = (dev.get("tran") or "").lower()
        if tran == "nvme" or str(dev.get("name", "")).startswith("nvme"):
            disk_type = "NVMe"
            interface = "PCIe"
        else:
            disk_type = "HD" if _as_bool(dev.get("rota")) else "SSD"
            interface = tran.upper() or None

        size = dev.get("size")
        try:
            size = int(size) if size is not None else None
        except (TypeError, ValueError):
            size = None

        model = clean_value(dev.get("model"))
        disks.append(
            DiskDevice(
                name=model or dev.get("name"),
                type=disk_type,
                interface_type=interface,
                size=size,
                vendor=clean_value(dev.get("vendor")),
                firmware_revision=clean_value(dev.get("rev")),
                serial_num=clean_value(dev.get("serial")),
            )
        )
    return disks


def parse_lspci_mm(text: str) -> list[PCIDevice]:
    """Parse ``lspci -mm`` machine-readable output."""
    devices = []
    for line in text.splitlines():
        if not line.strip():
            continue
        try:
            fields = shlex.split(line)
        except ValueError:
            logger.debug(f"Skipping malformed lspci line: {line!r}")
            continue
        if len(fields) < 4:
            continue
        devices.append(
            PCIDevice(
                slot=fields[0],
                device_class=fields[1],
                vendor=fields[2],
                device=fields[3],
            )
        )
    return devices


def gpus_from_nvidia_smi(text: str) -> list[GPUController]:
    """Parse ``nvidia-smi --query-gpu=name,memory.total,pci.bus_id,driver_version
    --format=csv,noheader,nounits`` output."""
    gpus = []
    for line in text.splitlines():
        fields = [f.strip() for f in line.split(",")]
        if len(fields) < 4 or not fields[0]:
            continue
        try:
            vram = int(float(fields[1]))
        except ValueError:
            vram = None  # "[N/A]" on unified memory systems
        gpus.append(
            GPUController(
                model=fields[0],
                vendor="NVIDIA",
                vram=vram,
                bus=fields[2] or None,
                driver_version=fields[3] or None,
            )
        )
    return gpus


def connection_type(connector: str) -> Optional[str]:
    """``HDMI-A-1`` -> ``HDMI``, ``eDP-1`` -> ``eDP``."""
    match = re.match(r"[A-Za-z]+", connector)
    return match.group(0) if match else None


_XRANDR_OUTPUT = re.compile(
    r"^(?P<name>\S+) connected(?P<primary> primary)?"
    r"(?: (?P<width>\d+)x(?P<height>\d+)\+\d+\+\d+)?"
)


def displays_from_xrandr(text: str) -> list[Display]:
    """Build displays from ``xrandr --query`` output."""
    displays: list[Display] = []
    pending: Optional[dict] = None

    def flush():
        if pending is not None:
            displays.append(Display(**pending))

    for line in text.splitlines():
        if not line.startswith((" ", "\t")):
            flush()
            pending = None
            match = _XRANDR_OUTPUT.match(line)
            if match:
                width = match.group("width")
                height = match.group("height")
                pending = {
                    "resolution_x": int(width) if width else None,
                    "resolution_y": int(height) if height else None,
                    "connection": connection_type(match.group("name")),
                    "main": match.group("primary") is not None,
                }
            continue

        if pending is None or "*" not in line:
            continue
        tokens = line.split()
        for token in tokens[1:]:
            if "*" in token:
                pending["current_refresh_rate"] = float(token.strip("*+"))
                break
        if pending["resolution_x"] is None:
            mode = re.match(r"(\d+)x(\d+)", tokens[0])
            if mode:
                pending["resolution_x"] = int(mode.group(1))
                pending["resolution_y"] = int(mode.group(2))

    flush()
    return displays


def edid_monitor_name(edid: bytes) -> Optional[str]:
    """Extract the monitor name descriptor (tag 0xFC) from an EDID blob."""
    if len(edid) < 128:
        return None
    for offset in (54, 72, 90, 108):
        descriptor = edid[offset : offset + 18]
        if descriptor[0:3] == b"\x00\x00\x00" and descriptor[3] == 0xFC:
            name = descriptor[5:18].split(b"\x0a", 1)[0]
            return name.decode("ascii", errors="replace").strip() or None
    return None


_BLUETOOTH_DEVICE = re.compile(r"^Device ((?:[0-9A-F]{2}:){5}[0-9A-F]{2})\s*(.*)$", re.IGNORECASE)


def parse_bluetoothctl_devices(text: str) -> list[tuple[str, Optional[str]]]:
    """Parse ``bluetoothctl devices`` into ``(mac, name)`` pairs."""
    devices = []
    for line in text.splitlines():
        match = _BLUETOOTH_DEVICE.match(line.strip())
        if match:
            devices.append((match.group(1).upper(), match.group(2).strip() or None))
    return devices




def chassis_type_name(code: Optional[str]) -> Optional[str]:
    """Map a numeric SMBIOS chassis type to its name."""
    if code is None:
        return None
    try:
        return CHASSIS_TYPES.get(int(code.strip()))
    except ValueError:
        return clean_value(code)


def usb_class_name(code: Optional[str]) -> Optional[str]:
    """Map a hex USB class code (``09``) to its name."""
    if not code:
        return None
    try:
        return USB_CLASSES.get(int(code, 16))
    except ValueError:
        return None


def cpu_vendor_name(vendor_id: Optional[str]) -> Optional[str]:
    if not vendor_id:
        return None
    return CPU_VENDORS.get(vendor_id, vendor_id)
