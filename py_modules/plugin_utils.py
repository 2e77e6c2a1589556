"""
PowerSync Utility Functions
Common helpers for running commands and writing files
"""
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple, Union

from plugin_logging import logger


def run_command(command: Union[str, List[str]], timeout: Optional[float] = 30.0) -> Tuple[bool, str, str]:
    """
    Execute a command with timeout and error handling

    Args:
        command: Command to execute (string or list)
        timeout: Command timeout in seconds, None waits forever

    Returns:
        Tuple of (success, stdout, stderr)
    """
    try:
        if isinstance(command, str):
            command = command.split()

        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False
        )

        success = result.returncode == 0
        if not success:
            logger.warning(f"Command exited with {result.returncode}: {' '.join(command)}")
        return success, result.stdout.strip(), result.stderr.strip()

    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {' '.join(command)}")
        return False, "", "Command timed out"
    except Exception as e:
        logger.error(f"Command execution failed: {e}")
        return False, "", str(e)


def ensure_directory(path: str) -> bool:
    """Ensure a directory exists, creating it if necessary"""
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
        return True
    except Exception as e:
        logger.error(f"Failed to create directory {path}: {e}")
        return False


def write_file_safe(file_path: str, content: str) -> bool:
    """Safely write to a file"""
    try:
        # Ensure parent directory exists
        ensure_directory(str(Path(file_path).parent))

        with open(file_path, 'w') as f:
            f.write(content)
        return True
    except Exception as e:
        logger.error(f"Failed to write file {file_path}: {e}")
        return False


def find_executable(name: str) -> Optional[str]:
    """Find an executable in PATH or common locations"""
    if os.path.isabs(name):
        return name if os.path.isfile(name) and os.access(name, os.X_OK) else None

    # Check PATH first
    path = shutil.which(name)
    if path:
        return path

    # Check common locations
    common_paths = [
        f"/usr/bin/{name}",
        f"/usr/local/bin/{name}",
        f"/usr/sbin/{name}",
        f"/sbin/{name}"
    ]

    for path in common_paths:
        if os.path.isfile(path) and os.access(path, os.X_OK):
            return path

    return None
