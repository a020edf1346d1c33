"""Shared fixtures."""

import pytest

from sysdive.hardware.models import (
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
    SystemSnapshot,
    TimeInfo,
    USBDevice,
    UUIDInfo,
    Volume,
)


@pytest.fixture
def full_snapshot():
    """A snapshot with every category populated."""
    return SystemSnapshot(
        time=TimeInfo(current=1_700_000_000.0, uptime=45_000.0, timezone="UTC"),
        system=SystemIdentity(
            manufacturer="LENOVO",
            model="21CB",
            version="ThinkPad X1 Carbon Gen 10",
            serial="PF3ABCDE",
            sku="LENOVO_MT_21CB",
        ),
        uuid=UUIDInfo(os="4c4c4544-0042-3510-8051-b4c04f4a4d32", hardware=None),
        bios=FirmwareInfo(
            vendor="LENOVO", version="N3AET75W (1.40 )", release_date="2023-05-12", revision="1.40"
        ),
        baseboard=BaseboardInfo(
            manufacturer="LENOVO", model="21CBCTO1WW", version="SDK0T76530 WIN", serial="L1HF2", asset_tag=None
        ),
        chassis=ChassisInfo(type="Notebook", manufacturer="LENOVO", model="None", serial="PF3ABCDE"),
        os_info=OSInfo(
            platform="linux",
            distro="Ubuntu",
            release="24.04",
            codename="noble",
            kernel="6.8.0-45-generic",
            arch="x86_64",
            hostname="workstation",
            uefi=True,
        ),
        cpu=CPUInfo(
            manufacturer="Intel",
            brand="12th Gen Intel(R) Core(TM) i7-1260P",
            socket="LGA1700",
            speed=2.1,
            speed_max=4.7,
            physical_cores=12,
            cores=16,
            governor="powersave",
            family="6",
            model="154",
            virtualization=True,
        ),
        cpu_cache=CPUCache(l1d=49152, l1i=32768, l2=1310720, l3=18874368),
        memory=MemorySummary(total=16 * 1024**3, available=8 * 1024**3, used=6 * 1024**3),
        memory_layout=(
            MemoryModule(
                size=8 * 1024**3,
                type="LPDDR5",
                clock_speed=5200,
                manufacturer="Samsung",
                part_num="K3LKBKB0BM-MGCP",
                voltage_configured=0.5,
            ),
            MemoryModule(
                size=8 * 1024**3,
                type="LPDDR5",
                clock_speed=5200,
                manufacturer="Samsung",
                part_num="K3LKBKB0BM-MGCP",
                voltage_configured=0.5,
            ),
        ),
        graphics=GraphicsInfo(
            controllers=(
                GPUController(
                    model="Alder Lake-P GT2 [Iris Xe Graphics]",
                    vendor="Intel Corporation",
                    vram=None,
                    bus="PCI 00:02.0",
                    driver_version="i915",
                ),
                GPUController(
                    model="NVIDIA GeForce RTX 4090",
                    vendor="NVIDIA",
                    vram=24564,
                    bus="00000000:01:00.0",
                    driver_version="550.54.14",
                ),
            ),
            displays=(
                Display(
                    model="DELL U2720Q",
                    resolution_x=3840,
                    resolution_y=2160,
                    current_refresh_rate=60.0,
                    connection="DP",
                    main=True,
                ),
            ),
        ),
        disk_layout=(
            DiskDevice(
                name="Samsung SSD 980 PRO 1TB",
                type="NVMe",
                interface_type="PCIe",
                size=1_000_204_886_016,
                vendor=None,
                firmware_revision="5B2QGXA7",
                serial_num="S5GXNF0R123456",
            ),
        ),
        fs_size=(
            Volume(fs="/dev/nvme0n1p2", mount="/", type="ext4", size=500 * 1024**3, used=125 * 1024**3, use=25.0),
            Volume(fs="/dev/nvme0n1p1", mount="/boot/efi", type="vfat", size=512 * 1024**2, used=6 * 1024**2, use=1.2),
        ),
        network_interfaces=(
            NetworkInterface(
                iface="lo", iface_name="lo", type="wired", mac="00:00:00:00:00:00",
                ip4="127.0.0.1", ip4_subnet="255.0.0.0", operstate="unknown", speed=0,
            ),
            NetworkInterface(
                iface="wlp0s20f3", iface_name="wlp0s20f3", type="wireless", mac="a0:b1:c2:d3:e4:f5",
                ip4="192.168.1.20", ip4_subnet="255.255.255.0", operstate="up", speed=866,
            ),
        ),
        audio=(
            AudioDevice(
                name="Alder Lake PCH-P High Definition Audio Controller",
                manufacturer="Intel Corporation",
                status="online",
            ),
        ),
        usb=(
            USBDevice(name="xHCI Host Controller", type="Hub", manufacturer="Linux 6.8.0 xhci-hcd", vendor="1d6b"),
            USBDevice(name="Integrated Camera", type="Video", manufacturer="Chicony Electronics", vendor="04f2"),
            USBDevice(name="Bluetooth Radio", type="Wireless", manufacturer=None, vendor="8087"),
        ),
        bluetooth_devices=(
            BluetoothDevice(name="WH-1000XM4", mac_device="AA:BB:CC:DD:EE:FF", connected=True),
            BluetoothDevice(name="MX Master 3", mac_device="11:22:33:44:55:66", connected=False),
        ),
        battery=BatteryInfo(
            has_battery=True,
            model="5B10W13975",
            manufacturer="SMP",
            type="Li-poly",
            designed_capacity=57000.0,
            max_capacity=51300.0,
            capacity_unit="mWh",
            percent=80.0,
            cycle_count=152,
            is_charging=False,
        ),
    )


@pytest.fixture
def empty_snapshot():
    """A snapshot where the provider reported nothing."""
    return SystemSnapshot()
