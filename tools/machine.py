"""tools/machine.py

Benchmark-runner machine preparation.

Frequency boost makes timings depend on thermal state and on whatever else
ran on the shared runner recently. The workflow turns boost *on* to build
quickly, *off* for measurement, and must leave it off when the run ends so
the next job on the runner starts from the same state.

The sysfs knob is usually root-owned; when a direct write is refused we fall
back to ``sudo -n tee`` (the runner's service account has passwordless sudo
for exactly this file).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .core_cmd import run_cmd

logger = logging.getLogger(__name__)

DEFAULT_BOOST_PATH = Path("/sys/devices/system/cpu/cpufreq/boost")


class BoostControlError(RuntimeError):
    """Raised when the CPU boost knob cannot be written."""


class CpuBoost:
    """Toggle CPU frequency boost through sysfs."""

    def __init__(self, path: Optional[Path] = None, *, use_sudo: bool = True) -> None:
        self.path = Path(path) if path else DEFAULT_BOOST_PATH
        self.use_sudo = use_sudo

    @property
    def available(self) -> bool:
        return self.path.exists()

    def read(self) -> Optional[bool]:
        try:
            return self.path.read_text(encoding="utf-8").strip() == "1"
        except OSError:
            return None

    def set(self, enabled: bool) -> None:
        value = "1" if enabled else "0"
        try:
            self.path.write_text(value, encoding="utf-8")
            return
        except PermissionError:
            if not self.use_sudo:
                raise BoostControlError(f"Permission denied writing {self.path}")
        except OSError as e:
            raise BoostControlError(f"Cannot write {self.path}: {e}") from e

        res = run_cmd(
            ["sudo", "-n", "tee", str(self.path)],
            input_text=value,
            timeout_seconds=30,
            print_stderr=False,
        )
        if not res.ok:
            raise BoostControlError(
                f"sudo tee {self.path} failed ({res.exit_code}): {res.stderr.strip()}"
            )

    def enable(self) -> None:
        self.set(True)

    def disable(self) -> None:
        self.set(False)
