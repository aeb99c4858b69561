from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from .errors import PlatformError
from .models import PackageManager, System

logger = logging.getLogger(__name__)

OS_RELEASE = "/etc/os-release"
UNKNOWN = "unknown"

PACKAGE_MANAGERS: Tuple[Tuple[str, PackageManager], ...] = (
    ("fedora", PackageManager.DNF),
    ("debian", PackageManager.APT_GET),
    ("arch", PackageManager.PACMAN),
    ("opensuse", PackageManager.ZYPPER),
)

def get_package_manager(distro: str) -> Optional[PackageManager]:
    """None means no known manager, which is a supported state."""
    for key, pm in PACKAGE_MANAGERS:
        if key == distro:
            return pm
    return None

def known_distros() -> Tuple[str, ...]:
    return tuple(key for key, _ in PACKAGE_MANAGERS)

def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value

def parse_os_release(contents: str) -> Dict[str, str]:
    info: Dict[str, str] = {}
    for line in contents.splitlines():
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        info[key.lower()] = strip_quotes(value)
    return info

def get_os_info(path: str = OS_RELEASE) -> Dict[str, str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            contents = f.read()
    except OSError as exc:
        raise PlatformError(f"{path} should exist on all supported Linux systems: {exc}") from exc
    return parse_os_release(contents)

def get_distribution(path: str = OS_RELEASE) -> Tuple[str, str]:
    info = get_os_info(path)
    return info.get("id", UNKNOWN).lower(), info.get("pretty_name", UNKNOWN)

def system_info(path: str = OS_RELEASE) -> System:
    distro, pretty_name = get_distribution(path)
    pm = get_package_manager(distro)
    logger.info("detected %s (id=%s), package manager: %s", pretty_name, distro, pm.value if pm else "none")
    return System(id=distro, pretty_name=pretty_name, package_manager=pm)
