"""Diagnostic tool for verifying the chatdown installation and its tools."""

import shutil
import sys
from importlib import import_module
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .models.config import ManualConfig


def check_dependency(
    module_name: str, package_name: Optional[str] = None, optional: bool = False
) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)
        optional: Whether this is an optional dependency

    Returns:
        Tuple of (success: bool, message: str)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        if optional:
            return False, f"[WARN] {display_name} (optional - not installed)"
        else:
            return False, f"[MISSING] {display_name}"


def check_executable(command: str) -> tuple[bool, str]:
    """Check that an external executable is on PATH."""
    location = shutil.which(command)
    if location is None:
        return False, f"[FAIL] {command} executable not found (man page rendering unavailable)"
    return True, f"[OK] {command} ({location})"


def check_man_root(root: Path) -> tuple[bool, str]:
    """Check that the man page tree exists."""
    if not root.is_dir():
        return False, f"[FAIL] Man page directory missing ({root})"
    sections = sorted(p.name for p in root.glob("man*") if p.is_dir())
    return True, f"[OK] Man page directory ({root}, {len(sections)} sections)"


def run_doctor(manual: Optional[ManualConfig] = None, use_rich: bool = True) -> int:
    """
    Run diagnostic checks and display results.

    Args:
        manual: Man page settings whose executable and directory are checked
        use_rich: Whether to use rich formatting

    Returns:
        Exit code (0 if all core dependencies OK, 1 if any core dependency missing)
    """
    manual = manual or ManualConfig()

    print("Running chatdown diagnostics...\n")

    core_checks = [
        ("bs4", "beautifulsoup4"),
        ("rich", "rich"),
        ("pydantic", "pydantic"),
        ("aiohttp", "aiohttp"),
    ]

    optional_checks = [
        ("yaml", "pyyaml", True),
    ]

    system_checks = [
        check_executable(manual.pandoc_command),
        check_man_root(manual.root),
    ]

    core_results = [check_dependency(mod, pkg) for mod, pkg in core_checks]
    optional_results = [check_dependency(mod, pkg, opt) for mod, pkg, opt in optional_checks]

    all_checks = {
        "Core Dependencies": core_results,
        "Optional Dependencies": optional_results,
        "System": system_checks,
    }

    if use_rich:
        console = Console()

        for category, results in all_checks.items():
            table = Table(title=category, show_header=False, box=None)
            table.add_column("Status", style="bold")

            for success, message in results:
                style = "green" if success else ("yellow" if "optional" in message else "red")
                table.add_row(message, style=style)

            console.print(table)
            console.print()
    else:
        for category, results in all_checks.items():
            print(f"{category}:")
            for _success, message in results:
                print(f"  {message}")
            print()

    core_failed = any(not success for success, _ in core_results)

    if core_failed:
        print("\nWARNING: Some core dependencies are missing!")
        print("\nRecommended fixes:")
        print("  1. For pip users: pip install --upgrade --force-reinstall chatdown")
        print("  2. For development: pip install -e .[dev]")
        return 1

    print("\nAll core dependencies installed correctly!")
    if not system_checks[0][0]:
        print(f"\nInstall {manual.pandoc_command} to serve manual pages.")
    return 0


if __name__ == "__main__":
    sys.exit(run_doctor())
