"""
L0 Data: Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# ── Linux (apt) ─────────────────────────────────────────────────

APT_REFRESH: list[str] = ["apt-get", "update", "-y"]

# Post-uninstall cleanup, in order.
APT_CLEANUP: list[list[str]] = [
    ["apt-get", "autoremove", "-y"],
    ["apt-get", "clean"],
]

# ── macOS (Homebrew) ────────────────────────────────────────────

BREW_INSTALL: list[str] = ["brew", "install", "{package}"]

BREW_CLEANUP: list[list[str]] = [
    ["brew", "autoremove"],
    ["brew", "cleanup"],
]

# ── Windows (Chocolatey) ───────────────────────────────────────

CHOCO_CLI = "choco"

CHOCO_INSTALL: list[str] = ["choco", "install", "{package}", "-y", "--no-progress"]

# Appended to the search path once the bootstrap has run.
CHOCO_BIN_DIR = r"C:\ProgramData\chocolatey\bin"

CHOCO_BOOTSTRAP: list[str] = [
    "powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-Command",
    "Set-ExecutionPolicy Bypass -Scope Process -Force; "
    "[System.Net.ServicePointManager]::SecurityProtocol = "
    "[System.Net.ServicePointManager]::SecurityProtocol -bor 3072; "
    "iex ((New-Object System.Net.WebClient).DownloadString("
    "'https://community.chocolatey.org/install.ps1'))",
]

# ── Timeouts (seconds) ──────────────────────────────────────────

INSTALL_TIMEOUT = 900      # archive downloads + installers
REFRESH_TIMEOUT = 300
REMOVE_TIMEOUT = 300
PROBE_TIMEOUT = 10

# ── Pre-commit environment ─────────────────────────────────────

PRECOMMIT_PACKAGES: list[str] = ["pre-commit", "checkov", "pyyaml"]
