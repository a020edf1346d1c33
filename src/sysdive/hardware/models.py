"""Snapshot records returned by information providers.

Every scalar field is optional: providers fill in what the platform exposes
and leave the rest as ``None``. Records are frozen and plural categories are
tuples, so a snapshot cannot change once acquired.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TimeInfo:
    current: Optional[float] = None  # epoch seconds
    uptime: Optional[float] = None  # seconds
    timezone: Optional[str] = None


@dataclass(frozen=True)
class SystemIdentity:
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    version: Optional[str] = None
    serial: Optional[str] = None
    sku: Optional[str] = None


@dataclass(frozen=True)
class UUIDInfo:
    os: Optional[str] = None
    hardware: Optional[str] = None


@dataclass(frozen=True)
class FirmwareInfo:
    vendor: Optional[str] = None
    version: Optional[str] = None
    release_date: Optional[str] = None
    revision: Optional[str] = None


@dataclass(frozen=True)
class BaseboardInfo:
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    version: Optional[str] = None
    serial: Optional[str] = None
    asset_tag: Optional[str] = None


@dataclass(frozen=True)
class ChassisInfo:
    type: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial: Optional[str] = None


@dataclass(frozen=True)
class OSInfo:
    platform: Optional[str] = None
    distro: Optional[str] = None
    release: Optional[str] = None
    codename: Optional[str] = None
    kernel: Optional[str] = None
    arch: Optional[str] = None
    hostname: Optional[str] = None
    uefi: Optional[bool] = None


@dataclass(frozen=True)
class CPUInfo:
    manufacturer: Optional[str] = None
    brand: Optional[str] = None
    socket: Optional[str] = None
    speed: Optional[float] = None  # GHz
    speed_max: Optional[float] = None  # GHz
    physical_cores: Optional[int] = None
    cores: Optional[int] = None  # logical
    governor: Optional[str] = None
    family: Optional[str] = None
    model: Optional[str] = None
    virtualization: Optional[bool] = None


@dataclass(frozen=True)
class CPUCache:
    """Per-core cache sizes in bytes."""

    l1d: Optional[int] = None
    l1i: Optional[int] = None
    l2: Optional[int] = None
    l3: Optional[int] = None


@dataclass(frozen=True)
class MemorySummary:
    total: Optional[int] = None
    available: Optional[int] = None
    used: Optional[int] = None


@dataclass(frozen=True)
class MemoryModule:
    size: Optional[int] = None  # bytes
    type: Optional[str] = None
    clock_speed: Optional[int] = None  # MHz
    manufacturer: Optional[str] = None
    part_num: Optional[str] = None
    voltage_configured: Optional[float] = None


@dataclass(frozen=True)
class GPUController:
    model: Optional[str] = None
    vendor: Optional[str] = None
    vram: Optional[int] = None  # MB
    bus: Optional[str] = None
    driver_version: Optional[str] = None


@dataclass(frozen=True)
class Display:
    model: Optional[str] = None
    resolution_x: Optional[int] = None
    resolution_y: Optional[int] = None
    current_refresh_rate: Optional[float] = None
    connection: Optional[str] = None
    main: Optional[bool] = None


@dataclass(frozen=True)
class GraphicsInfo:
    controllers: tuple[GPUController, ...] = ()
    displays: tuple[Display, ...] = ()


@dataclass(frozen=True)
class DiskDevice:
    name: Optional[str] = None
    type: Optional[str] = None  # 'NVMe', 'SSD', 'HD'
    interface_type: Optional[str] = None
    size: Optional[int] = None
    vendor: Optional[str] = None
    firmware_revision: Optional[str] = None
    serial_num: Optional[str] = None


@dataclass(frozen=True)
class Volume:
    fs: Optional[str] = None
    mount: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None
    used: Optional[int] = None
    use: Optional[float] = None  # percent


@dataclass(frozen=True)
class NetworkInterface:
    iface: Optional[str] = None
    iface_name: Optional[str] = None
    model: Optional[str] = None
    type: Optional[str] = None  # 'wired' or 'wireless'
    mac: Optional[str] = None
    ip4: Optional[str] = None
    ip4_subnet: Optional[str] = None
    operstate: Optional[str] = None
    speed: Optional[int] = None  # Mbit/s


@dataclass(frozen=True)
class AudioDevice:
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class USBDevice:
    name: Optional[str] = None
    type: Optional[str] = None
    manufacturer: Optional[str] = None
    vendor: Optional[str] = None


@dataclass(frozen=True)
class BluetoothDevice:
    name: Optional[str] = None
    mac_device: Optional[str] = None
    connected: Optional[bool] = None


@dataclass(frozen=True)
class BatteryInfo:
    has_battery: bool = False
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    type: Optional[str] = None
    designed_capacity: Optional[float] = None
    max_capacity: Optional[float] = None
    capacity_unit: Optional[str] = None  # 'mWh' or 'mAh'
    percent: Optional[float] = None
    cycle_count: Optional[int] = None
    is_charging: Optional[bool] = None


@dataclass(frozen=True)
class SystemSnapshot:
    """Everything acquired for one report run."""

    time: TimeInfo = field(default_factory=TimeInfo)
    system: SystemIdentity = field(default_factory=SystemIdentity)
    uuid: UUIDInfo = field(default_factory=UUIDInfo)
    bios: FirmwareInfo = field(default_factory=FirmwareInfo)
    baseboard: BaseboardInfo = field(default_factory=BaseboardInfo)
    chassis: ChassisInfo = field(default_factory=ChassisInfo)
    os_info: OSInfo = field(default_factory=OSInfo)
    cpu: CPUInfo = field(default_factory=CPUInfo)
    cpu_cache: CPUCache = field(default_factory=CPUCache)
    memory: MemorySummary = field(default_factory=MemorySummary)
    memory_layout: tuple[MemoryModule, ...] = ()
    graphics: GraphicsInfo = field(default_factory=GraphicsInfo)
    disk_layout: tuple[DiskDevice, ...] = ()
    fs_size: tuple[Volume, ...] = ()
    network_interfaces: tuple[NetworkInterface, ...] = ()
    audio: tuple[AudioDevice, ...] = ()
    usb: tuple[USBDevice, ...] = ()
    bluetooth_devices: tuple[BluetoothDevice, ...] = ()
    battery: Optional[BatteryInfo] = None
