"""Information provider interface and the local-host implementation."""

from abc import ABC, abstractmethod
from typing import Optional

from . import detector
from .models import (
    AudioDevice,
    BaseboardInfo,
    BatteryInfo,
    BluetoothDevice,
    ChassisInfo,
    CPUCache,
    CPUInfo,
    DiskDevice,
    FirmwareInfo,
    GraphicsInfo,
    MemoryModule,
    MemorySummary,
    NetworkInterface,
    OSInfo,
    SystemIdentity,
    TimeInfo,
    USBDevice,
    UUIDInfo,
    Volume,
)



class InfoProvider(ABC):
    """Source of hardware and OS records, one query per category.

    Queries are blocking and independent of each other, so callers may run
    them concurrently. A category the platform cannot report is returned as
    an empty record or list; raising is reserved for genuine failures.
    """

    @abstractmethod
    def time_info(self) -> TimeInfo:
        """Current time and uptime."""

    @abstractmethod
    def system(self) -> SystemIdentity:
        """System manufacturer, model and serial."""

    @abstractmethod
    def uuid(self) -> UUIDInfo:
        """OS and hardware UUIDs."""

    @abstractmethod
    def bios(self) -> FirmwareInfo:
        """BIOS / UEFI firmware."""

    @abstractmethod
    def baseboard(self) -> BaseboardInfo:
        """Motherboard."""

    @abstractmethod
    def chassis(self) -> ChassisInfo:
        """Chassis / case."""

    @abstractmethod
    def os_info(self) -> OSInfo:
        """Operating system."""

    @abstractmethod
    def cpu(self) -> CPUInfo:
        """Processor."""

    @abstractmethod
    def cpu_cache(self) -> CPUCache:
        """Processor cache sizes."""

    @abstractmethod
    def memory(self) -> MemorySummary:
        """RAM usage summary."""

    @abstractmethod
    def memory_layout(self) -> list[MemoryModule]:
        """Installed memory modules."""

    @abstractmethod
    def graphics(self) -> GraphicsInfo:
        """Graphics controllers and displays."""

    @abstractmethod
    def disk_layout(self) -> list[DiskDevice]:
        """Physical disks."""

    @abstractmethod
    def fs_size(self) -> list[Volume]:
        """Mounted file systems."""

    @abstractmethod
    def network_interfaces(self) -> list[NetworkInterface]:
        """Network interfaces."""

    @abstractmethod
    def audio(self) -> list[AudioDevice]:
        """Audio devices."""

    @abstractmethod
    def usb(self) -> list[USBDevice]:
        """USB devices."""

    @abstractmethod
    def bluetooth_devices(self) -> list[BluetoothDevice]:
        """Known Bluetooth devices."""

    @abstractmethod
    def battery(self) -> Optional[BatteryInfo]:
        """Battery, or a record with ``has_battery=False`` on desktops."""


class LocalInfoProvider(InfoProvider):
    """Best-effort provider for the machine this process runs on.

    Args:
        command_timeout: Seconds allowed for each external command
            (dmidecode, lsblk, lspci, ...).
    """

    def __init__(self, command_timeout: float = 5.0) -> None:
        self.command_timeout = command_timeout

    def time_info(self) -> TimeInfo:
        return detector.detect_time()

    def system(self) -> SystemIdentity:
        return detector.detect_system_identity()

    def uuid(self) -> UUIDInfo:
        return detector.detect_uuid()

    def bios(self) -> FirmwareInfo:
        return detector.detect_firmware()

    def baseboard(self) -> BaseboardInfo:
        return detector.detect_baseboard()

    def chassis(self) -> ChassisInfo:
        return detector.detect_chassis()

    def os_info(self) -> OSInfo:
        return detector.detect_os()

    def cpu(self) -> CPUInfo:
        return detector.detect_cpu(timeout=self.command_timeout)

    def cpu_cache(self) -> CPUCache:
        return detector.detect_cpu_cache()

    def memory(self) -> MemorySummary:
        return detector.detect_memory()

    def memory_layout(self) -> list[MemoryModule]:
        return detector.detect_memory_layout(timeout=self.command_timeout)

    def graphics(self) -> GraphicsInfo:
        return detector.detect_graphics(timeout=self.command_timeout)

    def disk_layout(self) -> list[DiskDevice]:
        return detector.detect_disks(timeout=self.command_timeout)

    def fs_size(self) -> list[Volume]:
        return detector.detect_volumes()

    def network_interfaces(self) -> list[NetworkInterface]:
        return detector.detect_network_interfaces()

    def audio(self) -> list[AudioDevice]:
        return detector.detect_audio(timeout=self.command_timeout)

    def usb(self) -> list[USBDevice]:
        return detector.detect_usb()

    def bluetooth_devices(self) -> list[BluetoothDevice]:
        return detector.detect_bluetooth(timeout=self.command_timeout)

    def battery(self) -> Optional[BatteryInfo]:
        return detector.detect_battery()
