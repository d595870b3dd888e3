from pathlib import Path


class UnitctlError(Exception):
    """Base class for all unitctl errors.
    """


class HomeDirectoryNotSetError(UnitctlError):
    """Raised in user mode when HOME is missing from the environment.
    """

    def __init__(self) -> None:
        super().__init__(
            'HOME is not set; cannot resolve the user services directory'
        )


class ServicesDirectoryError(UnitctlError):
    """Raised when the services directory cannot be created.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(
            f'Failed to create services directory {path}: {reason}'
        )


class UnitFileError(UnitctlError):
    """Base class for unit file errors.

    Args:
        path: Path of the unit file involved
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class UnitFileWriteError(UnitFileError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, f'Failed to write unit file {path}: {reason}')


class UnitFileNotFoundError(UnitFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path, f'Unit file does not exist: {path}')


class UnitFileReadError(UnitFileError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, f'Failed to read unit file {path}: {reason}')


class UnitFileRemoveError(UnitFileError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, f'Failed to remove unit file {path}: {reason}')


class UnitFileParseError(UnitctlError):
    """Raised when unit file text cannot be parsed.

    Args:
        line_number: 1-based line the error was found on
    """

    def __init__(self, line_number: int, message: str) -> None:
        self.line_number = line_number
        super().__init__(f'Line {line_number}: {message}')


class ServiceQueryError(UnitctlError):
    """Raised when the live service query fails.
    """


class CommandExecutionError(UnitctlError):
    """Raised when a systemctl invocation fails to run or exits non-zero.

    Args:
        command: The rendered command line
        returncode: Exit status, None if the process never started
    """

    def __init__(
        self,
        command: str,
        returncode: int | None,
        stderr: str = '',
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr

        if returncode is None:
            message = f'Failed to run {command}'
        else:
            message = f'{command} exited with status {returncode}'
        if stderr:
            message = f'{message}: {stderr.strip()}'

        super().__init__(message)
