"""Shared pytest configuration and fixtures for the PowerSync test suite."""

import threading
from pathlib import Path
from typing import List, Optional

import pytest

from config_handler import ConfigHandler
from config_service import ConfigService
from escalation import EscalationExecutor, EscalationOutcome, StagingArea
from power_core import CPUProfile, TccProfile, TccSettings
from profile_texts import ProfileTexts
from push_channel import PushChannel


# =============================================================================
# Helpers
# =============================================================================

def make_profile(name: str, governor: str = "powersave", description: str = "") -> TccProfile:
    return TccProfile(name=name, description=description, cpu=CPUProfile(governor=governor))


class FakeDaemonExecutor(EscalationExecutor):
    """
    Escalation executor whose helper is simulated in-process.

    It reads back the staged files exactly as the daemon would and, when
    accepting, pushes the new state through the channel.
    """

    def __init__(self, staging: StagingArea, channel: PushChannel, accept: bool = True):
        super().__init__(staging, elevator="pkexec", daemon_executable="/usr/bin/tccd", timeout=5)
        self.channel = channel
        self.accept = accept
        self.gate: Optional[threading.Event] = None
        self.commands: List[List[str]] = []
        self.staged_settings: List[TccSettings] = []
        self.staged_profiles: List[List[TccProfile]] = []

    def run_helper(self, command: List[str]) -> EscalationOutcome:
        if self.gate is not None:
            self.gate.wait(timeout=5)
        self.commands.append(command)

        settings = profiles = None
        if '--new_settings' in command:
            settings = self.staging.config.read_settings(self.staging.settings_path)
            self.staged_settings.append(settings)
        if '--new_profiles' in command:
            profiles = self.staging.config.read_profiles(self.staging.profiles_path)
            self.staged_profiles.append(profiles)

        if not self.accept:
            return EscalationOutcome(False, command, "Request dismissed")
        if profiles is not None:
            self.channel.publish_custom_profiles(profiles)
        if settings is not None:
            self.channel.publish_settings(settings)
        return EscalationOutcome(True, command)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def default_profiles() -> List[TccProfile]:
    return [make_profile("Quiet"), make_profile("Office"), make_profile("Max Performance", "performance")]


@pytest.fixture
def channel(default_profiles) -> PushChannel:
    channel = PushChannel()
    channel.publish_default_profiles(default_profiles)
    channel.publish_custom_profiles([make_profile("Work"), make_profile("Play", "performance")])
    channel.publish_settings(TccSettings(state_map={"power_ac": "Office", "power_bat": "Quiet"}))
    return channel


@pytest.fixture
def config_handler(tmp_path: Path) -> ConfigHandler:
    return ConfigHandler(str(tmp_path / "settings"), str(tmp_path / "fantables.json"))


@pytest.fixture
def staging(config_handler, tmp_path: Path) -> StagingArea:
    return StagingArea(config_handler, str(tmp_path / "tmptccsettings"), str(tmp_path / "tmptccprofiles"))


@pytest.fixture
def executor(staging, channel) -> FakeDaemonExecutor:
    return FakeDaemonExecutor(staging, channel)


@pytest.fixture
def service(channel, executor, config_handler) -> ConfigService:
    service = ConfigService(channel, executor, config_handler, texts=ProfileTexts(lambda text: text))
    yield service
    service.close()
