import logging
import subprocess
from typing import Optional, Tuple

from .shell import Shell

# Configure logging
logger = logging.getLogger(__name__)


class CommandExecutor:
    """Runs command strings through the user's shell."""

    def __init__(self, shell: Shell):
        self.shell = shell

    def execute_command(self, command: str) -> Tuple[Optional[int], str, str]:
        """
        Execute a single shell command.

        The command is handed to the shell as one argument, e.g.
        ``bash -c "<command>"``, so pipes and globbing work as typed.

        Args:
            command: The shell command to execute

        Returns:
            Tuple of (return_code, stdout, stderr). return_code is None when the
            shell itself could not be started; stderr then holds the reason.
        """
        program, flag = self.shell.invocation()
        logger.info(f"Executing command via {program} {flag}: {command}")

        try:
            process = subprocess.Popen(
                [program, flag, command],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True
            )
            stdout, stderr = process.communicate()
        except OSError as e:
            logger.error(f"Failed to launch {program}: {e}")
            return None, "", str(e)

        if process.returncode == 0:
            logger.info(f"Command executed successfully: {command}")
        else:
            logger.warning(f"Command failed with return code {process.returncode}: {command}")

        return process.returncode, stdout, stderr
