"""Plain-text diagnostic report generation.

Every section is built by its own function from one part of the snapshot and
returns a finished text fragment; ``generate_report`` joins them in a fixed
order. Nothing here reads the clock or the machine, so the same snapshot
always renders the same text.
"""

from datetime import datetime
from typing import Optional

from sysdive.hardware.models import (
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
    SystemSnapshot,
    TimeInfo,
    USBDevice,
    UUIDInfo,
    Volume,
)

from .formatting import (
    MISSING,
    field_line,
    format_bytes,
    format_number,
    header,
    show,
    subheader,
    with_unit,
    yes_no,
)

REPORT_TITLE = "FULL SYSTEM DIAGNOSTIC REPORT"

SECTION_TITLES = (
    "SYSTEM HARDWARE",
    "BIOS / FIRMWARE",
    "MOTHERBOARD",
    "CHASSIS / CASE",
    "OPERATING SYSTEM",
    "PROCESSOR (CPU)",
    "MEMORY (RAM) SUMMARY",
    "GRAPHICS CONTROLLERS (GPU)",
    "PHYSICAL STORAGE (DISKS)",
    "LOGICAL VOLUMES (DRIVES)",
    "NETWORK INTERFACES",
    "AUDIO DEVICES",
    "USB DEVICES",
    "BLUETOOTH",
    "BATTERY",
)

NO_DIMMS = "No DIMM details available.\n"
NO_GPUS = "No graphics controllers found.\n"
NO_DISPLAYS = "No displays detected.\n"
NO_DISKS = "No physical disks found.\n"
NO_VOLUMES = "No mounted volumes found.\n"
NO_INTERFACES = "No network interfaces found.\n"
NO_AUDIO = "No audio devices found.\n"
NO_USB = "No USB devices found.\n"
NO_BLUETOOTH = "No connected Bluetooth devices found.\n"

NO_BATTERY = (
    "No battery detected.\n"
    "Running in desktop mode (AC power only); battery health metrics do not apply.\n"
)

INTERFACE_SEPARATOR = "-----------------\n"
INDENT = "  "


def _item(label: str, value: str) -> str:
    return field_line(label, value, indent=INDENT)


def format_timestamp(current: Optional[float]) -> str:
    """Local date and time of the snapshot."""
    if current is None:
        return MISSING
    return datetime.fromtimestamp(current).strftime("%Y-%m-%d %H:%M:%S")


def format_uptime(uptime: Optional[float]) -> str:
    if uptime is None:
        return MISSING
    return f"{uptime / 3600:.2f} Hours"


def battery_wear(designed: Optional[float], maximum: Optional[float]) -> str:
    """Capacity lost relative to design, e.g. ``10.00% (approx)``.

    Needs both capacities and a non-zero design capacity, else ``N/A``.
    """
    if designed is None or maximum is None or designed == 0:
        return MISSING
    wear = (designed - maximum) / designed * 100
    return f"{wear:.2f}% (approx)"


def format_vram(vram_mb: Optional[int]) -> str:
    if not vram_mb:
        return "Shared/Dynamic"
    return format_bytes(vram_mb * 1024 * 1024)


def format_link_speed(speed: Optional[int]) -> str:
    if not speed:
        return MISSING
    return f"{format_number(speed)} Mbit/s"


def format_capacity(value: Optional[float], unit: Optional[str]) -> str:
    if value is None:
        return MISSING
    text = format_number(value, places=2)
    return f"{text} {unit}" if unit else text


# --- Sections ---


def report_preamble(time_info: TimeInfo) -> str:
    return (
        f"{REPORT_TITLE}\n"
        f"Generated on: {format_timestamp(time_info.current)}\n"
        f"Timezone    : {show(time_info.timezone)}\n"
        f"Uptime      : {format_uptime(time_info.uptime)}\n"
    )


def system_section(system: SystemIdentity, uuid: UUIDInfo) -> str:
    return "".join(
        [
            header("SYSTEM HARDWARE"),
            field_line("Manufacturer", show(system.manufacturer)),
            field_line("Model", show(system.model)),
            field_line("Version", show(system.version)),
            field_line("Serial Num", show(system.serial)),
            field_line("UUID", show(uuid.os)),
            field_line("SKU", show(system.sku)),
        ]
    )


def firmware_section(bios: FirmwareInfo) -> str:
    return "".join(
        [
            header("BIOS / FIRMWARE"),
            field_line("Vendor", show(bios.vendor)),
            field_line("Version", show(bios.version)),
            field_line("Release Date", show(bios.release_date)),
            field_line("Revision", show(bios.revision)),
        ]
    )


def baseboard_section(board: BaseboardInfo) -> str:
    return "".join(
        [
            header("MOTHERBOARD"),
            field_line("Manufacturer", show(board.manufacturer)),
            field_line("Model", show(board.model)),
            field_line("Version", show(board.version)),
            field_line("Serial Num", show(board.serial)),
            field_line("Asset Tag", show(board.asset_tag)),
        ]
    )


def chassis_section(chassis: ChassisInfo) -> str:
    return "".join(
        [
            header("CHASSIS / CASE"),
            field_line("Type", show(chassis.type)),
            field_line("Manufacturer", show(chassis.manufacturer)),
            field_line("Model", show(chassis.model)),
            field_line("Serial Num", show(chassis.serial)),
        ]
    )


def os_section(os_info: OSInfo) -> str:
    return "".join(
        [
            header("OPERATING SYSTEM"),
            field_line("Platform", show(os_info.platform)),
            field_line("Distro", show(os_info.distro)),
            field_line("Release", show(os_info.release)),
            field_line("Codename", show(os_info.codename)),
            field_line("Kernel", show(os_info.kernel)),
            field_line("Arch", show(os_info.arch)),
            field_line("Hostname", show(os_info.hostname)),
            field_line("UEFI", yes_no(os_info.uefi)),
        ]
    )


def cpu_section(cpu: CPUInfo, cache: CPUCache) -> str:
    return "".join(
        [
            header("PROCESSOR (CPU)"),
            field_line("Manufacturer", show(cpu.manufacturer)),
            field_line("Brand", show(cpu.brand)),
            field_line("Socket", show(cpu.socket)),
            field_line(
                "Speed",
                f"{show(cpu.speed)} GHz (Base) / {show(cpu.speed_max)} GHz (Max)",
            ),
            field_line(
                "Cores",
                f"{show(cpu.physical_cores)} Physical / {show(cpu.cores)} Logical",
            ),
            field_line("Governor", show(cpu.governor)),
            field_line("Family/Model", f"{show(cpu.family)} / {show(cpu.model)}"),
            field_line("Virtualiz.", yes_no(cpu.virtualization, yes="Supported")),
            subheader("CPU CACHE"),
            field_line("L1 Data", format_bytes(cache.l1d)),
            field_line("L1 Instruct", format_bytes(cache.l1i)),
            field_line("L2 Cache", format_bytes(cache.l2)),
            field_line("L3 Cache", format_bytes(cache.l3)),
        ]
    )


def memory_module_block(index: int, stick: MemoryModule) -> str:
    return "".join(
        [
            f"[Stick #{index}]\n",
            _item("Size", format_bytes(stick.size)),
            _item("Type", show(stick.type)),
            _item("Clock Speed", with_unit(stick.clock_speed, " MHz")),
            _item("Manuf", show(stick.manufacturer)),
            _item("Part Num", show(stick.part_num)),
            _item("Voltage", with_unit(stick.voltage_configured, "v")),
        ]
    )


def memory_section(memory: MemorySummary, modules: tuple[MemoryModule, ...]) -> str:
    parts = [
        header("MEMORY (RAM) SUMMARY"),
        field_line("Total Size", format_bytes(memory.total)),
        field_line("Available", format_bytes(memory.available)),
        field_line("Used", format_bytes(memory.used)),
        subheader("PHYSICAL MEMORY STICKS (DIMMS)"),
    ]
    if not modules:
        parts.append(NO_DIMMS)
    parts.extend(memory_module_block(i, stick) for i, stick in enumerate(modules, start=1))
    return "".join(parts)


def graphics_section(graphics: GraphicsInfo) -> str:
    parts = [header("GRAPHICS CONTROLLERS (GPU)")]
    if not graphics.controllers:
        parts.append(NO_GPUS)
    for i, gpu in enumerate(graphics.controllers, start=1):
        parts.extend(
            [
                f"[GPU #{i}]\n",
                _item("Model", show(gpu.model)),
                _item("Vendor", show(gpu.vendor)),
                _item("VRAM", format_vram(gpu.vram)),
                _item("Bus", show(gpu.bus)),
                _item("Driver", show(gpu.driver_version)),
            ]
        )

    parts.append(subheader("DISPLAYS (MONITORS)"))
    if not graphics.displays:
        parts.append(NO_DISPLAYS)
    for i, display in enumerate(graphics.displays, start=1):
        parts.extend(
            [
                f"[Display #{i}]\n",
                _item("Model", show(display.model)),
                _item(
                    "Resolution",
                    f"{show(display.resolution_x)} x {show(display.resolution_y)}",
                ),
                _item("Refresh", with_unit(display.current_refresh_rate, " Hz")),
                _item("Connection", show(display.connection)),
                _item("Main", yes_no(display.main, yes="Yes (Primary)")),
            ]
        )
    return "".join(parts)


def disks_section(disks: tuple[DiskDevice, ...]) -> str:
    parts = [header("PHYSICAL STORAGE (DISKS)")]
    if not disks:
        parts.append(NO_DISKS)
    for i, disk in enumerate(disks, start=1):
        parts.extend(
            [
                f"[Disk #{i}] -> {show(disk.name)}\n",
                _item("Type", f"{show(disk.type)} ({show(disk.interface_type)})"),
                _item("Size", format_bytes(disk.size)),
                _item("Vendor", show(disk.vendor)),
                _item("Firmware", show(disk.firmware_revision)),
                # usually hidden without root
                _item("Serial", show(disk.serial_num)),
            ]
        )
    return "".join(parts)


def volumes_section(volumes: tuple[Volume, ...]) -> str:
    parts = [header("LOGICAL VOLUMES (DRIVES)")]
    if not volumes:
        parts.append(NO_VOLUMES)
    for i, volume in enumerate(volumes, start=1):
        parts.extend(
            [
                f"[Volume #{i}] -> {show(volume.fs)}\n",
                _item("Mount Point", show(volume.mount)),
                _item("Type", show(volume.type)),
                _item("Size", format_bytes(volume.size)),
                _item("Used", f"{format_bytes(volume.used)} ({show(volume.use)}%)"),
            ]
        )
    return "".join(parts)


def network_section(interfaces: tuple[NetworkInterface, ...]) -> str:
    parts = [header("NETWORK INTERFACES")]
    if not interfaces:
        parts.append(NO_INTERFACES)
    for i, net in enumerate(interfaces, start=1):
        parts.extend(
            [
                f"[Interface #{i}] -> {show(net.iface)}\n",
                _item("Name", show(net.iface_name)),
                _item("Model", show(net.model)),
                _item("Type", show(net.type)),
                _item("MAC Addr", show(net.mac)),
                _item("IPv4", show(net.ip4)),
                _item("IPv4 Mask", show(net.ip4_subnet)),
                _item("State", show(net.operstate)),
                _item("Speed", format_link_speed(net.speed)),
                INTERFACE_SEPARATOR,
            ]
        )
    return "".join(parts)


def audio_section(devices: tuple[AudioDevice, ...]) -> str:
    parts = [header("AUDIO DEVICES")]
    if not devices:
        parts.append(NO_AUDIO)
    for i, audio in enumerate(devices, start=1):
        parts.extend(
            [
                f"[Device #{i}]\n",
                _item("Name", show(audio.name)),
                _item("Manuf", show(audio.manufacturer)),
                _item("Status", show(audio.status)),
            ]
        )
    return "".join(parts)


def usb_section(devices: tuple[USBDevice, ...]) -> str:
    parts = [header("USB DEVICES")]
    if not devices:
        parts.append(NO_USB)
    for i, usb in enumerate(devices, start=1):
        parts.extend(
            [
                f"[USB #{i}]\n",
                _item("Name", show(usb.name)),
                _item("Type", show(usb.type)),
                _item("Manuf", show(usb.manufacturer)),
                _item("Vendor", show(usb.vendor)),
            ]
        )
    return "".join(parts)


def bluetooth_section(devices: tuple[BluetoothDevice, ...]) -> str:
    parts = [header("BLUETOOTH")]
    if not devices:
        parts.append(NO_BLUETOOTH)
    for i, device in enumerate(devices, start=1):
        parts.extend(
            [
                f"[Device #{i}]\n",
                _item("Name", show(device.name)),
                _item("MAC", show(device.mac_device)),
                _item("Connected", yes_no(device.connected)),
            ]
        )
    return "".join(parts)


def battery_section(battery: Optional[BatteryInfo]) -> str:
    if battery is None or not battery.has_battery:
        return header("BATTERY") + NO_BATTERY

    unit = battery.capacity_unit
    percent = with_unit(battery.percent, "%") if battery.percent is not None else MISSING
    return "".join(
        [
            header("BATTERY"),
            field_line("Model", show(battery.model)),
            field_line("Manufacturer", show(battery.manufacturer)),
            field_line("Type", show(battery.type)),
            field_line("Design Cap.", format_capacity(battery.designed_capacity, unit)),
            field_line("Max Capacity", format_capacity(battery.max_capacity, unit)),
            field_line("Charge", percent),
            field_line("Cycle Count", show(battery.cycle_count)),
            field_line("Charging", yes_no(battery.is_charging)),
            field_line(
                "Wear Level",
                battery_wear(battery.designed_capacity, battery.max_capacity),
            ),
        ]
    )


def generate_report(snapshot: SystemSnapshot) -> str:
    """Render a snapshot as the full diagnostic report.

    Args:
        snapshot: Acquired system data. It is only read.

    Returns:
        Report text, one titled section per category.
    """
    sections = (
        report_preamble(snapshot.time),
        system_section(snapshot.system, snapshot.uuid),
        firmware_section(snapshot.bios),
        baseboard_section(snapshot.baseboard),
        chassis_section(snapshot.chassis),
        os_section(snapshot.os_info),
        cpu_section(snapshot.cpu, snapshot.cpu_cache),
        memory_section(snapshot.memory, snapshot.memory_layout),
        graphics_section(snapshot.graphics),
        disks_section(snapshot.disk_layout),
        volumes_section(snapshot.fs_size),
        network_section(snapshot.network_interfaces),
        audio_section(snapshot.audio),
        usb_section(snapshot.usb),
        bluetooth_section(snapshot.bluetooth_devices),
        battery_section(snapshot.battery),
    )
    return "".join(sections)
