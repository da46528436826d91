#!/usr/bin/env python3
"""
System check script for GoFire.
Verifies Python dependencies and access to the relay GPIO lines.
"""

from __future__ import annotations

import sys

from gofire.config import GPIO_PINS


def check_python_package(package_name: str, import_name: str | None = None) -> bool:
    """Check if a Python package is available."""
    if import_name is None:
        import_name = package_name

    try:
        __import__(import_name)
        print(f"✅ {package_name} is installed")
        return True
    except ImportError:
        print(f"❌ {package_name} is NOT installed")
        return False


def check_gpio() -> bool:
    """Check if gpiozero can find a pin factory that drives real pins."""
    try:
        from gpiozero import Device

        factory = Device.pin_factory
        if factory is None:
            factory = Device.pin_factory = Device._default_pin_factory()
        print(f"✅ GPIO pin factory available ({type(factory).__name__})")
        return True
    except Exception as e:
        print(f"❌ GPIO is NOT accessible: {e}")
        print("   You may need to run as root or add user to gpio group")
        return False


def main() -> int:
    print("=" * 50)
    print("GoFire System Check")
    print("=" * 50)
    print()

    all_ok = True

    print("Checking Python packages...")
    all_ok &= check_python_package("flask", "flask")
    all_ok &= check_python_package("pytz", "pytz")
    all_ok &= check_python_package("gpiozero", "gpiozero")
    print()

    print("Checking relay board...")
    all_ok &= check_gpio()
    print(f"   CH1=GPIO{GPIO_PINS.ch1} CH2=GPIO{GPIO_PINS.ch2} CH3=GPIO{GPIO_PINS.ch3}")
    print()

    print("=" * 50)
    if all_ok:
        print("✅ All checks passed! System is ready.")
        print()
        print("Next steps:")
        print("  gofire-server --listen_on :8600")
        return 0

    print("⚠️  Some checks failed. Please fix the issues above.")
    print()
    print("Common solutions:")
    print("  - Install dependencies: uv sync --extra rpi")
    print("  - Add user to gpio group: sudo usermod -a -G gpio $USER")
    return 1


if __name__ == "__main__":
    sys.exit(main())
