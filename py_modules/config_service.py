"""
Config Service
One per process: owns the mirror, catalog, edit session and commit pipeline
"""
from typing import Iterable, List, Optional

from ac_power_manager import determine_state
from commit_pipeline import CommitPipeline, CommitResult
from config_handler import ConfigHandler
from edit_session import EditSession
from escalation import EscalationExecutor, StagingArea
from notifications import StateNotifier
from plugin_logging import logger
from plugin_settings import ClientSettings
from plugin_utils import find_executable
from power_core import FanProfile, TccProfile, TccSettings
from profile_catalog import ProfileCatalog
from profile_texts import ProfileTexts, Translator
from push_channel import PushChannel
from state_mirror import StateMirror


class ConfigService:
    """Client-side entry point for reading and changing daemon configuration"""

    def __init__(self, channel: PushChannel, executor: EscalationExecutor,
                 config: ConfigHandler, texts: Optional[ProfileTexts] = None,
                 notifier: Optional[StateNotifier] = None):
        self.channel = channel
        self.config = config
        self.texts = texts or ProfileTexts()
        self.notifier = notifier or StateNotifier()

        self.mirror = StateMirror(channel, self.notifier)
        self.catalog = ProfileCatalog(self.mirror)
        self.session = EditSession(self.mirror, self.notifier)
        self.pipeline = CommitPipeline(self.mirror, self.catalog, self.session, executor)

    # Observables

    @property
    def observe_settings(self):
        return self.notifier.settings

    @property
    def editing_profile(self):
        return self.notifier.editing_profile

    # State Mirror

    def update_config_data(self) -> None:
        self.mirror.refresh()

    def get_settings(self) -> Optional[TccSettings]:
        return self.mirror.current_settings()

    def get_custom_profiles(self) -> List[TccProfile]:
        return self.mirror.custom_profiles()

    def get_default_profiles(self) -> List[TccProfile]:
        return self.mirror.default_profiles()

    def get_all_profiles(self) -> List[TccProfile]:
        return self.mirror.all_profiles()

    # Profile Catalog

    def get_profile_by_name(self, name: str) -> Optional[TccProfile]:
        return self.catalog.find_by_name(name)

    def get_custom_profile_by_name(self, name: str) -> Optional[TccProfile]:
        return self.catalog.find_custom_by_name(name)

    # Edit Session

    def set_current_editing_profile(self, custom_profile_name: Optional[str]) -> bool:
        return self.session.begin(custom_profile_name)

    def get_current_editing_profile(self) -> Optional[TccProfile]:
        return self.session.current_draft()

    def edit_profile_changes(self) -> bool:
        return self.session.has_changes()

    # Commit Pipeline

    def set_active_profile(self, profile_name: str, state_id: str) -> CommitResult:
        return self.pipeline.assign_profile(profile_name, state_id)

    async def copy_profile(self, profile_name: str, new_profile_name: str) -> CommitResult:
        return await self.pipeline.copy_profile(profile_name, new_profile_name)

    async def delete_custom_profile(self, profile_name: str) -> CommitResult:
        return await self.pipeline.delete_custom_profile(profile_name)

    async def write_profile(self, current_profile_name: str, profile: TccProfile,
                            states: Optional[Iterable[str]] = None) -> CommitResult:
        return await self.pipeline.write_profile(current_profile_name, profile, states)

    async def save_settings(self) -> CommitResult:
        return await self.pipeline.save_settings()

    def write_current_editing_profile(self) -> CommitResult:
        return self.pipeline.commit_editing_profile()

    # Local configuration and texts

    def get_fan_profiles(self) -> List[FanProfile]:
        return self.config.get_default_fan_profiles()

    def get_default_profile_name(self, descriptor) -> Optional[str]:
        return self.texts.get_default_profile_name(descriptor)

    def get_default_profile_description(self, descriptor) -> Optional[str]:
        return self.texts.get_default_profile_description(descriptor)

    @property
    def cpu_settings_disabled_message(self) -> str:
        return self.texts.cpu_settings_disabled_message

    @property
    def fan_control_disabled_message(self) -> str:
        return self.texts.fan_control_disabled_message

    def get_active_profile(self, state_id: Optional[str] = None) -> Optional[TccProfile]:
        """Profile assigned to state_id, or to the current power state"""
        settings = self.mirror.current_settings()
        if settings is None:
            return None
        state_id = state_id or determine_state().value
        profile_name = settings.state_map.get(state_id)
        if profile_name is None:
            return None
        return self.catalog.find_by_name(profile_name)

    def close(self) -> None:
        self.mirror.close()


def create_config_service(client_settings: ClientSettings, channel: Optional[PushChannel] = None,
                          translator: Optional[Translator] = None) -> ConfigService:
    """Build the service from client settings"""
    channel = channel or PushChannel()
    config = ConfigHandler(client_settings.get("settings_file"), client_settings.get("fan_tables_file"))

    if channel.settings.value is None:
        # Until the daemon pushes settings, start from the readable settings file
        channel.publish_settings(config.read_settings_no_throw())

    staging = StagingArea(
        config,
        client_settings.get("staging_settings_path"),
        client_settings.get("staging_profiles_path"),
    )
    elevator = client_settings.get("privilege_elevator")
    resolved = find_executable(elevator)
    if resolved is None:
        logger.warning(f"Privilege elevator {elevator} not found, commits will fail")

    executor = EscalationExecutor(
        staging,
        elevator=resolved or elevator,
        daemon_executable=client_settings.resolve_daemon_executable(),
        timeout=client_settings.get("escalation_timeout"),
    )
    logger.info(f"Config service using daemon {executor.daemon_executable} via {executor.elevator}")
    return ConfigService(channel, executor, config, texts=ProfileTexts(translator))
