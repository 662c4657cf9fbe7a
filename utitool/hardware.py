"""Filter out Apple hardware UTIs registered by CoreTypes.

Launch Services does not flag these as hardware, so this is a best-effort
substring denylist kept in hardware_types.txt.
"""

import os
from functools import lru_cache

APPLE_PREFIX = "com.apple."
PUBLIC_PREFIX = "public."
DEFAULT_TYPES_PATH = os.path.join(os.path.dirname(__file__), "hardware_types.txt")


def _read_types(text):
    entries = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            entries.append(line)
    return tuple(entries)


@lru_cache(maxsize=None)
def _packaged_types():
    return load_hardware_types(DEFAULT_TYPES_PATH)


def load_hardware_types(path=None):
    if path is None:
        return _packaged_types()
    with open(path, encoding="utf-8") as f:
        return _read_types(f.read())


def is_hardware_noise(uti, hardware_types=None):
    if hardware_types is None:
        hardware_types = load_hardware_types()

    if uti == "com.apple.mac":
        return True

    if uti.startswith(APPLE_PREFIX):
        stub = uti[len(APPLE_PREFIX):]
        if any(hardware_type in stub for hardware_type in hardware_types):
            return True

    if uti.startswith(PUBLIC_PREFIX):
        if "app-category" in uti[len(PUBLIC_PREFIX):]:
            return True

    return False
