import logging
import os
import platform
from enum import Enum
from typing import Optional, Tuple

import psutil

logger = logging.getLogger(__name__)


class Shell(Enum):
    """The command interpreter that will run a generated command."""

    POWERSHELL = "powershell"
    PWSH = "pwsh"
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    DASH = "dash"
    KSH = "ksh"
    CSH = "csh"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Human-readable name used inside the system prompt."""
        return _LABELS[self]

    def invocation(self) -> Tuple[str, str]:
        """Returns (program, flag) used to run a command string in this shell."""
        if self is Shell.POWERSHELL:
            return "powershell", "-Command"
        if self is Shell.PWSH:
            # PowerShell Core; the only PowerShell binary outside Windows
            return "pwsh", "-Command"
        if self is Shell.UNKNOWN:
            if platform.system() == "Windows":
                return "cmd", "/C"
            return "sh", "-c"
        return self.value, "-c"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Shell":
        """Maps a process or executable name such as '/bin/zsh' or 'pwsh.exe' to a Shell."""
        if not name:
            return cls.UNKNOWN
        name = os.path.basename(name.strip()).lower()
        if name.endswith(".exe"):
            name = name[:-4]
        name = name.lstrip("-")  # login shells show up as '-bash'
        return _NAMES.get(name, cls.UNKNOWN)

    @classmethod
    def detect(cls) -> "Shell":
        """
        Detects the shell this process was launched from.

        The parent process is checked first; the SHELL environment variable is
        the fallback when the parent is not a recognised shell.
        """
        try:
            parent = psutil.Process(os.getppid()).name()
        except psutil.Error as e:
            logger.debug(f"Could not inspect parent process: {e}")
            parent = None

        shell = cls.from_name(parent)
        if shell is cls.UNKNOWN:
            shell = cls.from_name(os.environ.get("SHELL"))
        logger.info(f"Detected shell: {shell.value} (parent process: {parent})")
        return shell


_LABELS = {
    Shell.POWERSHELL: "Windows PowerShell",
    Shell.PWSH: "PowerShell (pwsh)",
    Shell.BASH: "Bourne Again Shell (bash / sh)",
    Shell.ZSH: "Z Shell (zsh)",
    Shell.FISH: "Friendly Interactive Shell (fish)",
    Shell.DASH: "Debian Almquist Shell (dash)",
    Shell.KSH: "Korn Shell (ksh)",
    Shell.CSH: "C Shell (csh)",
    Shell.UNKNOWN: "",
}

_NAMES = {
    "powershell": Shell.POWERSHELL,
    "pwsh": Shell.PWSH,
    "bash": Shell.BASH,
    "sh": Shell.BASH,
    "zsh": Shell.ZSH,
    "fish": Shell.FISH,
    "dash": Shell.DASH,
    "ksh": Shell.KSH,
    "mksh": Shell.KSH,
    "csh": Shell.CSH,
    "tcsh": Shell.CSH,
}
