"""
System and hardware details written into the session log header.

Values come from ``platform`` and ``psutil``. Graphics details have no
portable source, so they default to ``Unknown`` and hosts that know better
pass their own provider to the session logger.
"""

import platform
from dataclasses import dataclass, field
from typing import Callable, Optional

import psutil

from stats_logger.core.logging_utils import get_module_logger

logger = get_module_logger("PlatformInfo")

UNKNOWN = "Unknown"

_MACHINE_ID_PATHS = (
    "/etc/machine-id",
    "/var/lib/dbus/machine-id",
)


@dataclass(frozen=True)
class SystemInfo:
    """Immutable snapshot of the machine the session runs on.

    Attributes:
        operating_system: OS name and release.
        graphics_driver: Graphics API/driver version string.
        battery_status: Charging/Discharging/Full, or None when unknown.
        cpu_model: Processor description.
        cpu_threads: Logical processor count.
        cpu_frequency_mhz: Maximum (or current) CPU frequency.
        gpu_vendor, gpu_vendor_id, gpu_model, gpu_device_id: Graphics adapter.
        ram_mb: Physical memory in MB.
        vram_mb: Graphics memory in MB.
        device_id: Stable machine identifier, or None when unsupported.
    """

    operating_system: str = UNKNOWN
    graphics_driver: str = UNKNOWN
    battery_status: Optional[str] = None
    cpu_model: str = UNKNOWN
    cpu_threads: int = 0
    cpu_frequency_mhz: int = 0
    gpu_vendor: str = UNKNOWN
    gpu_vendor_id: int = 0
    gpu_model: str = UNKNOWN
    gpu_device_id: int = 0
    ram_mb: int = 0
    vram_mb: int = 0
    device_id: Optional[str] = field(default=None)


SystemInfoProvider = Callable[[], SystemInfo]


def get_device_identifier() -> Optional[str]:
    """Return the machine id, or None if this system does not expose one."""
    for path in _MACHINE_ID_PATHS:
        try:
            with open(path, "r", encoding="utf-8") as f:
                value = f.read().strip()
                if value:
                    return value
        except OSError:
            continue
    return None


def _battery_status() -> Optional[str]:
    try:
        battery = psutil.sensors_battery()
    except (AttributeError, NotImplementedError, OSError):
        return None
    if battery is None:
        return None
    if battery.power_plugged is None:
        return None
    if battery.power_plugged:
        return "Full" if battery.percent >= 100 else "Charging"
    return "Discharging"


def _cpu_frequency_mhz() -> int:
    try:
        freq = psutil.cpu_freq()
    except (NotImplementedError, OSError, RuntimeError):
        return 0
    if freq is None:
        return 0
    return int(freq.max or freq.current or 0)


def detect_system_info() -> SystemInfo:
    """Query the running system.

    Every lookup degrades to a default; this never raises for missing data.
    """
    memory = psutil.virtual_memory()
    info = SystemInfo(
        operating_system=f"{platform.system()} {platform.release()} ({platform.version()})",
        battery_status=_battery_status(),
        cpu_model=platform.processor() or platform.machine() or UNKNOWN,
        cpu_threads=psutil.cpu_count(logical=True) or 0,
        cpu_frequency_mhz=_cpu_frequency_mhz(),
        ram_mb=int(memory.total // (1024 * 1024)),
        device_id=get_device_identifier(),
    )
    logger.debug("System detected: %s", info)
    return info


__all__ = [
    "SystemInfo",
    "SystemInfoProvider",
    "UNKNOWN",
    "detect_system_info",
    "get_device_identifier",
]
