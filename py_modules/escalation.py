"""
Privilege Escalation
Stages payloads at fixed locations and hands them to the daemon through the
privilege helper (pkexec <daemon> --new_profiles <file> --new_settings <file>)
"""
import asyncio
import threading
from dataclasses import dataclass
from typing import List, Optional

from config_handler import ConfigHandler
from plugin_logging import logger
from plugin_utils import run_command
from power_core import TccProfile, TccSettings


@dataclass
class EscalationOutcome:
    """Result of one helper invocation"""
    success: bool
    command: List[str]
    error: str = ""

    def __bool__(self) -> bool:
        return self.success


class StagingArea:
    """The two well-known staging files; every write overwrites the last"""

    def __init__(self, config: ConfigHandler, settings_path: str, profiles_path: str):
        self.config = config
        self.settings_path = settings_path
        self.profiles_path = profiles_path

    def stage(self, settings: Optional[TccSettings] = None,
              profiles: Optional[List[TccProfile]] = None) -> None:
        """Write the given payloads, raises ConfigurationError on failure"""
        if profiles is not None:
            self.config.write_profiles(profiles, self.profiles_path)
        if settings is not None:
            self.config.write_settings(settings, self.settings_path)


class EscalationExecutor:
    """
    Runs the stage-and-escalate procedure.

    Both flavors go through the same synchronous procedure and the same lock,
    so a staging file is never rewritten while a helper may still read it.
    """

    def __init__(self, staging: StagingArea, elevator: str, daemon_executable: str,
                 timeout: Optional[float] = 300.0):
        self.staging = staging
        self.elevator = elevator
        self.daemon_executable = daemon_executable
        self.timeout = timeout
        self._lock = threading.Lock()

    def build_command(self, with_settings: bool, with_profiles: bool) -> List[str]:
        command = [self.elevator, self.daemon_executable]
        if with_profiles:
            command += ['--new_profiles', self.staging.profiles_path]
        if with_settings:
            command += ['--new_settings', self.staging.settings_path]
        return command

    def run_helper(self, command: List[str]) -> EscalationOutcome:
        """Invoke the helper; success means a zero exit status"""
        success, _, stderr = run_command(command, timeout=self.timeout)
        return EscalationOutcome(success, command, "" if success else stderr or "helper failed")

    def execute_blocking(self, settings: Optional[TccSettings] = None,
                         profiles: Optional[List[TccProfile]] = None) -> EscalationOutcome:
        """Stage the payloads and block until the helper exits"""
        if settings is None and profiles is None:
            return EscalationOutcome(False, [], "nothing to stage")

        command = self.build_command(settings is not None, profiles is not None)
        with self._lock:
            try:
                self.staging.stage(settings=settings, profiles=profiles)
            except Exception as e:
                logger.error(f"Failed to stage payload: {e}")
                return EscalationOutcome(False, command, str(e))

            logger.info(f"Escalating: {' '.join(command)}")
            outcome = self.run_helper(command)

        if outcome:
            logger.info("Daemon accepted the new configuration")
        else:
            logger.error(f"Escalation failed: {outcome.error}")
        return outcome

    async def execute_async(self, settings: Optional[TccSettings] = None,
                            profiles: Optional[List[TccProfile]] = None) -> EscalationOutcome:
        """Same as execute_blocking, awaited without blocking the event loop"""
        return await asyncio.to_thread(self.execute_blocking, settings, profiles)
