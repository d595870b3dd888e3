import logging
import subprocess

from unitctl.exceptions import CommandExecutionError
from unitctl.models.service import CommandInvocation


class CommandRunner:
    """Executes systemctl invocations built by the adapter.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def run(self, invocation: CommandInvocation, check: bool = True) -> int:
        """Run an invocation, inheriting the terminal's stdio.

        Args:
            invocation: Command to execute
            check: Raise when the command exits non-zero

        Returns:
            The command's exit status

        Raises:
            CommandExecutionError: If the command cannot be started, or exits
                non-zero while check is set
        """
        self._logger.info('Running %s', invocation)

        try:
            completed = subprocess.run(invocation.argv, check=False)
        except OSError as e:
            self._logger.error('Failed to run %s: %s', invocation, e)
            raise CommandExecutionError(str(invocation), None, str(e)) from e

        if check and completed.returncode != 0:
            self._logger.error(
                '%s exited with status %d',
                invocation,
                completed.returncode,
            )
            raise CommandExecutionError(str(invocation), completed.returncode)

        return completed.returncode
