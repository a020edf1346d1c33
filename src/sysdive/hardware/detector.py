"""Individual category probes for the local machine, with fallbacks.

Probes never raise for a platform that lacks the data, a missing tool or a
root-only file: they log at DEBUG and return an empty record.
"""

import logging
import platform
import socket
import subprocess
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import distro as linux_distro
import psutil

from .models import (
    AudioDevice,
    BaseboardInfo,
    BatteryInfo,
    BluetoothDevice,
    ChassisInfo,
    CPUCache,
    CPUInfo,
    Display,
    DiskDevice,
    FirmwareInfo,
    GPUController,
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
from .parsers import (
    AUDIO_PCI_CLASSES,
    DISPLAY_PCI_CLASSES,
    PCIDevice,
    chassis_type_name,
    clean_value,
    connection_type,
    cpu_vendor_name,
    disks_from_lsblk,
    displays_from_xrandr,
    edid_monitor_name,
    gpus_from_nvidia_smi,
    memory_modules_from_dmidecode,
    parse_bluetoothctl_devices,
    parse_lspci_mm,
    parse_size_string,
    processor_socket_from_dmidecode,
    usb_class_name,
)

logger = logging.getLogger(__name__)

SYSFS_ROOT = Path("/sys")
ETC_ROOT = Path("/etc")

DEFAULT_TIMEOUT = 5.0

_LSBLK_COLUMNS = "NAME,TYPE,TRAN,SIZE,VENDOR,MODEL,REV,SERIAL,ROTA"


def run_command(command: list[str], timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Run a command and return its stdout, or None if it is unavailable or fails."""
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"{command[0]} unavailable: {e}")
        return None

    if result.returncode != 0:
        stderr = result.stderr.strip() if result.stderr else ""
        logger.debug(f"{' '.join(command)} exited with {result.returncode}: {stderr}")
        return None
    return result.stdout


def read_text(path: Path) -> Optional[str]:
    """Read and strip a small text file, or None if it cannot be read."""
    try:
        return path.read_text(errors="replace").strip()
    except OSError:
        return None


def _dmi(name: str) -> Optional[str]:
    return clean_value(read_text(SYSFS_ROOT / "class" / "dmi" / "id" / name))


def _is_linux() -> bool:
    return platform.system() == "Linux"


# --- Time and identity ---


def detect_time() -> TimeInfo:
    now = time.time()
    try:
        uptime = now - psutil.boot_time()
    except Exception as e:
        logger.debug(f"Boot time unavailable: {e}")
        uptime = None
    return TimeInfo(
        current=now,
        uptime=uptime,
        timezone=datetime.now().astimezone().tzname(),
    )


def detect_system_identity() -> SystemIdentity:
    return SystemIdentity(
        manufacturer=_dmi("sys_vendor"),
        model=_dmi("product_name"),
        version=_dmi("product_version"),
        serial=_dmi("product_serial"),
        sku=_dmi("product_sku"),
    )


def detect_uuid() -> UUIDInfo:
    machine_id = read_text(ETC_ROOT / "machine-id") or read_text(
        Path("/var/lib/dbus/machine-id")
    )
    return UUIDInfo(
        os=machine_id or None,
        hardware=_dmi("product_uuid"),
    )


def detect_firmware() -> FirmwareInfo:
    return FirmwareInfo(
        vendor=_dmi("bios_vendor"),
        version=_dmi("bios_version"),
        release_date=_dmi("bios_date"),
        revision=_dmi("bios_release"),
    )


def detect_baseboard() -> BaseboardInfo:
    return BaseboardInfo(
        manufacturer=_dmi("board_vendor"),
        model=_dmi("board_name"),
        version=_dmi("board_version"),
        serial=_dmi("board_serial"),
        asset_tag=_dmi("board_asset_tag"),
    )


def detect_chassis() -> ChassisInfo:
    return ChassisInfo(
        type=chassis_type_name(_dmi("chassis_type")),
        manufacturer=_dmi("chassis_vendor"),
        model=_dmi("chassis_version"),
        serial=_dmi("chassis_serial"),
    )


def detect_os() -> OSInfo:
    """Detect the operating system and distribution."""
    system = platform.system()
    distro = release = codename = None
    uefi = None

    if system == "Linux":
        distro = linux_distro.name()
        release = linux_distro.version()
        codename = linux_distro.codename()
        uefi = (SYSFS_ROOT / "firmware" / "efi").exists()
    elif system == "Darwin":
        distro = "macOS"
        release = platform.mac_ver()[0] or None
    elif system == "Windows":
        distro = f"Windows {platform.release()}"
        release = platform.version()

    return OSInfo(
        platform=system.lower() or None,
        distro=distro or None,
        release=release or None,
        codename=codename or None,
        kernel=platform.release() or None,
        arch=platform.machine() or None,
        hostname=socket.gethostname() or None,
        uefi=uefi,
    )


# --- Processor ---


def _cpuinfo() -> dict:
    try:
        import cpuinfo

        return cpuinfo.get_cpu_info()
    except Exception as e:
        logger.debug(f"py-cpuinfo failed: {e}")
        return {}


def _advertised_ghz(info: dict) -> Optional[float]:
    hz = info.get("hz_advertised")
    if isinstance(hz, (list, tuple)) and hz and isinstance(hz[0], (int, float)) and hz[0] > 0:
        return round(hz[0] / 1e9, 2)
    return None


def detect_cpu(timeout: float = DEFAULT_TIMEOUT) -> CPUInfo:
    """Detect processor details from py-cpuinfo, psutil and sysfs."""
    info = _cpuinfo()

    speed = _advertised_ghz(info)
    speed_max = None
    try:
        freq = psutil.cpu_freq()
        if freq is not None:
            if speed is None and freq.current:
                speed = round(freq.current / 1000, 2)
            if freq.max:
                speed_max = round(freq.max / 1000, 2)
    except Exception as e:
        logger.debug(f"CPU frequency unavailable: {e}")

    socket_name = None
    if _is_linux():
        output = run_command(["dmidecode", "-t", "processor"], timeout=timeout)
        if output:
            socket_name = processor_socket_from_dmidecode(output)

    flags = info.get("flags") or []
    brand = info.get("brand_raw") or None
    manufacturer = cpu_vendor_name(info.get("vendor_id_raw"))
    if manufacturer is None and brand and brand.startswith("Apple"):
        manufacturer = "Apple"

    family = info.get("family")
    model = info.get("model")

    return CPUInfo(
        manufacturer=manufacturer,
        brand=brand,
        socket=socket_name,
        speed=speed,
        speed_max=speed_max,
        physical_cores=psutil.cpu_count(logical=False),
        cores=psutil.cpu_count(logical=True),
        governor=read_text(
            SYSFS_ROOT / "devices" / "system" / "cpu" / "cpu0" / "cpufreq" / "scaling_governor"
        ),
        family=str(family) if family is not None else None,
        model=str(model) if model is not None else None,
        virtualization="vmx" in flags or "svm" in flags,
    )


def detect_cpu_cache() -> CPUCache:
    """Detect per-core cache sizes from sysfs, falling back to py-cpuinfo."""
    sizes: dict[str, Optional[int]] = {"l1d": None, "l1i": None, "l2": None, "l3": None}

    cache_dir = SYSFS_ROOT / "devices" / "system" / "cpu" / "cpu0" / "cache"
    try:
        indexes = sorted(cache_dir.glob("index*"))
    except OSError:
        indexes = []

    for index in indexes:
        level = read_text(index / "level")
        cache_type = read_text(index / "type")
        size = parse_size_string(read_text(index / "size"))
        if level == "1" and cache_type == "Data":
            sizes["l1d"] = size
        elif level == "1" and cache_type == "Instruction":
            sizes["l1i"] = size
        elif level in ("2", "3"):
            sizes[f"l{level}"] = size

    if all(v is None for v in sizes.values()):
        info = _cpuinfo()
        for key, field_name in (
            ("l1d", "l1_data_cache_size"),
            ("l1i", "l1_instruction_cache_size"),
            ("l2", "l2_cache_size"),
            ("l3", "l3_cache_size"),
        ):
            value = info.get(field_name)
            if isinstance(value, int) and value > 0:
                sizes[key] = value

    return CPUCache(**sizes)


# --- Memory ---


def detect_memory() -> MemorySummary:
    mem = psutil.virtual_memory()
    return MemorySummary(total=mem.total, available=mem.available, used=mem.used)


def detect_memory_layout(timeout: float = DEFAULT_TIMEOUT) -> list[MemoryModule]:
    """Detect installed DIMMs (dmidecode, needs root)."""
    if not _is_linux():
        return []
    output = run_command(["dmidecode", "-t", "memory"], timeout=timeout)
    if not output:
        logger.debug("No DIMM details (dmidecode missing or not root)")
        return []
    return memory_modules_from_dmidecode(output)


# --- Graphics ---


def _detect_nvidia_gpus(timeout: float) -> list[GPUController]:
    """Detect NVIDIA GPUs.

    Method 1: pynvml
    Method 2: nvidia-smi CLI
    """
    try:
        import pynvml

        pynvml.nvmlInit()
        try:
            driver = pynvml.nvmlSystemGetDriverVersion()
            if isinstance(driver, bytes):
                driver = driver.decode("utf-8")

            gpus = []
            for index in range(pynvml.nvmlDeviceGetCount()):
                handle = pynvml.nvmlDeviceGetHandleByIndex(index)
                name = pynvml.nvmlDeviceGetName(handle)
                if isinstance(name, bytes):
                    name = name.decode("utf-8")

                # Memory query fails on unified memory architectures
                vram = None
                try:
                    vram = pynvml.nvmlDeviceGetMemoryInfo(handle).total // (1024 * 1024)
                except pynvml.NVMLError as e:
                    logger.debug(f"pynvml memory query failed (unified memory?): {e}")

                bus_id = pynvml.nvmlDeviceGetPciInfo(handle).busId
                if isinstance(bus_id, bytes):
                    bus_id = bus_id.decode("utf-8")

                gpus.append(
                    GPUController(
                        model=name,
                        vendor="NVIDIA",
                        vram=vram,
                        bus=bus_id,
                        driver_version=driver,
                    )
                )
            return gpus
        finally:
            pynvml.nvmlShutdown()
    except Exception as e:
        logger.debug(f"pynvml detection failed: {e}")

    output = run_command(
        [
            "nvidia-smi",
            "--query-gpu=name,memory.total,pci.bus_id,driver_version",
            "--format=csv,noheader,nounits",
        ],
        timeout=timeout,
    )
    return gpus_from_nvidia_smi(output) if output else []


def _pci_devices(timeout: float) -> list[PCIDevice]:
    if not _is_linux():
        return []
    output = run_command(["lspci", "-mm"], timeout=timeout)
    return parse_lspci_mm(output) if output else []


def _pci_sysfs_dir(slot: str) -> Path:
    if slot.count(":") == 1:
        slot = f"0000:{slot}"
    return SYSFS_ROOT / "bus" / "pci" / "devices" / slot


def _pci_driver(slot: str) -> Optional[str]:
    """Kernel module bound to a PCI device."""
    driver_link = _pci_sysfs_dir(slot) / "driver"
    try:
        return driver_link.resolve(strict=True).name
    except OSError:
        return None


def _pci_driver_version(slot: str) -> Optional[str]:
    """Module version when the driver exports one, else the module name."""
    driver = _pci_driver(slot)
    if driver is None:
        return None
    return read_text(SYSFS_ROOT / "module" / driver / "version") or driver


def _detect_drm_displays() -> list[Display]:
    """Fallback display detection from DRM connectors (no X server needed)."""
    displays = []
    try:
        connectors = sorted((SYSFS_ROOT / "class" / "drm").glob("card*-*"))
    except OSError:
        return []

    for connector in connectors:
        if read_text(connector / "status") != "connected":
            continue

        width = height = None
        modes = read_text(connector / "modes")
        if modes:
            first = modes.splitlines()[0]
            w, _, h = first.partition("x")
            if w.isdigit() and h.isdigit():
                width, height = int(w), int(h)

        model = None
        try:
            model = edid_monitor_name((connector / "edid").read_bytes())
        except OSError:
            pass

        name = connector.name.split("-", 1)[1]
        displays.append(
            Display(
                model=model,
                resolution_x=width,
                resolution_y=height,
                connection=connection_type(name),
            )
        )
    return displays


def detect_displays(timeout: float = DEFAULT_TIMEOUT) -> list[Display]:
    output = run_command(["xrandr", "--query"], timeout=timeout)
    if output:
        displays = displays_from_xrandr(output)
        if displays:
            return displays
    return _detect_drm_displays()


def detect_graphics(timeout: float = DEFAULT_TIMEOUT) -> GraphicsInfo:
    """Detect graphics controllers and connected displays."""
    nvidia = _detect_nvidia_gpus(timeout)

    others = []
    for dev in _pci_devices(timeout):
        if dev.device_class not in DISPLAY_PCI_CLASSES:
            continue
        if nvidia and "nvidia" in dev.vendor.lower():
            continue
        others.append(
            GPUController(
                model=dev.device,
                vendor=dev.vendor,
                bus=f"PCI {dev.slot}",
                driver_version=_pci_driver_version(dev.slot),
            )
        )

    return GraphicsInfo(
        controllers=tuple(nvidia + others),
        displays=tuple(detect_displays(timeout)),
    )


# --- Storage ---


def detect_disks(timeout: float = DEFAULT_TIMEOUT) -> list[DiskDevice]:
    if not _is_linux():
        return []
    output = run_command(["lsblk", "-J", "-b", "-d", "-o", _LSBLK_COLUMNS], timeout=timeout)
    return disks_from_lsblk(output) if output else []


def detect_volumes() -> list[Volume]:
    """Detect mounted file systems and their usage."""
    volumes = []
    for part in psutil.disk_partitions(all=False):
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except OSError as e:
            logger.debug(f"Skipping {part.mountpoint}: {e}")
            continue
        volumes.append(
            Volume(
                fs=part.device or None,
                mount=part.mountpoint,
                type=part.fstype or None,
                size=usage.total,
                used=usage.used,
                use=usage.percent,
            )
        )
    return volumes


# --- Network ---


def detect_network_interfaces() -> list[NetworkInterface]:
    """Detect network interfaces, addresses and link state."""
    addrs = psutil.net_if_addrs()
    stats = psutil.net_if_stats()

    interfaces = []
    for name, entries in addrs.items():
        mac = ip4 = ip4_subnet = None
        for entry in entries:
            if entry.family == psutil.AF_LINK:
                mac = entry.address or None
            elif entry.family == socket.AF_INET and ip4 is None:
                ip4, ip4_subnet = entry.address, entry.netmask

        stat = stats.get(name)
        net_dir = SYSFS_ROOT / "class" / "net" / name
        operstate = read_text(net_dir / "operstate")
        if operstate is None and stat is not None:
            operstate = "up" if stat.isup else "down"

        interfaces.append(
            NetworkInterface(
                iface=name,
                iface_name=name,
                type="wireless" if (net_dir / "wireless").exists() else "wired",
                mac=mac,
                ip4=ip4,
                ip4_subnet=ip4_subnet,
                operstate=operstate,
                speed=stat.speed if stat is not None else None,
            )
        )
    return interfaces


# --- Peripherals ---


def detect_audio(timeout: float = DEFAULT_TIMEOUT) -> list[AudioDevice]:
    devices = []
    for dev in _pci_devices(timeout):
        if dev.device_class not in AUDIO_PCI_CLASSES:
            continue
        devices.append(
            AudioDevice(
                name=dev.device,
                manufacturer=dev.vendor,
                status="online" if _pci_driver(dev.slot) else None,
            )
        )
    return devices


def detect_usb() -> list[USBDevice]:
    """Detect USB devices from sysfs."""
    usb_root = SYSFS_ROOT / "bus" / "usb" / "devices"
    try:
        entries = sorted(usb_root.iterdir())
    except OSError:
        return []

    devices = []
    for dev in entries:
        vendor_id = read_text(dev / "idVendor")
        if vendor_id is None:
            continue  # interfaces, not devices

        device_class = read_text(dev / "bDeviceClass")
        if device_class in (None, "00"):
            # class defined per interface
            device_class = read_text(dev / f"{dev.name}:1.0" / "bInterfaceClass")

        devices.append(
            USBDevice(
                name=read_text(dev / "product"),
                type=usb_class_name(device_class),
                manufacturer=read_text(dev / "manufacturer"),
                vendor=vendor_id,
            )
        )
    return devices


def detect_bluetooth(timeout: float = DEFAULT_TIMEOUT) -> list[BluetoothDevice]:
    """Detect known Bluetooth devices through bluetoothctl."""
    if not _is_linux():
        return []
    output = run_command(["bluetoothctl", "devices"], timeout=timeout)
    if not output:
        return []

    connected = None
    connected_output = run_command(["bluetoothctl", "devices", "Connected"], timeout=timeout)
    if connected_output is not None:
        connected = {mac for mac, _ in parse_bluetoothctl_devices(connected_output)}

    return [
        BluetoothDevice(
            name=name,
            mac_device=mac,
            connected=(mac in connected) if connected is not None else None,
        )
        for mac, name in parse_bluetoothctl_devices(output)
    ]


# --- Battery ---


def _micro(value: Optional[str]) -> Optional[float]:
    """Convert a sysfs micro-unit reading (µWh, µAh) to milli-units."""
    if value is None:
        return None
    try:
        return int(value) / 1000
    except ValueError:
        return None


def _int_or_none(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def _sysfs_battery() -> Optional[BatteryInfo]:
    supply_root = SYSFS_ROOT / "class" / "power_supply"
    try:
        nodes = sorted(supply_root.iterdir())
    except OSError:
        return None

    for node in nodes:
        if read_text(node / "type") != "Battery":
            continue
        if read_text(node / "scope") == "Device":
            continue  # peripheral battery (mouse, headset)
        if read_text(node / "present") == "0":
            continue

        if (node / "energy_full_design").exists():
            designed = _micro(read_text(node / "energy_full_design"))
            full = _micro(read_text(node / "energy_full"))
            unit = "mWh"
        else:
            designed = _micro(read_text(node / "charge_full_design"))
            full = _micro(read_text(node / "charge_full"))
            unit = "mAh"

        status = read_text(node / "status")
        capacity = _int_or_none(read_text(node / "capacity"))
        cycles = _int_or_none(read_text(node / "cycle_count"))

        return BatteryInfo(
            has_battery=True,
            model=clean_value(read_text(node / "model_name")),
            manufacturer=clean_value(read_text(node / "manufacturer")),
            type=clean_value(read_text(node / "technology")),
            designed_capacity=designed,
            max_capacity=full,
            capacity_unit=unit if designed is not None or full is not None else None,
            percent=float(capacity) if capacity is not None else None,
            cycle_count=cycles,
            is_charging=(status == "Charging") if status else None,
        )
    return None


def detect_battery() -> BatteryInfo:
    """Detect the system battery; desktops report ``has_battery=False``."""
    battery = _sysfs_battery()
    if battery is not None:
        return battery

    sensors_battery = getattr(psutil, "sensors_battery", None)
    if sensors_battery is not None:
        try:
            status = sensors_battery()
        except Exception as e:
            logger.debug(f"psutil battery query failed: {e}")
            status = None
        if status is not None:
            return BatteryInfo(
                has_battery=True,
                percent=round(status.percent, 2),
                is_charging=status.power_plugged,
            )

    return BatteryInfo(has_battery=False)
