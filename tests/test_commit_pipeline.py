"""Tests for the commit intents, driven through the config service."""

import asyncio
import threading

import pytest

from conftest import make_profile
from plugin_enums import CommitStatus


# =============================================================================
# assign_profile (blocking)
# =============================================================================

def test_assign_profile_stages_settings_only(service, executor):
    result = service.set_active_profile("Quiet", "power_ac")

    assert result
    assert result.status is CommitStatus.APPLIED
    assert executor.staged_settings[-1].state_map["power_ac"] == "Quiet"
    assert "--new_profiles" not in executor.commands[-1]
    assert service.get_settings().state_map["power_ac"] == "Quiet"


def test_assign_profile_refreshes_even_when_escalation_fails(service, executor):
    executor.accept = False
    emitted = []
    service.observe_settings.subscribe(emitted.append, replay=False)

    result = service.set_active_profile("Quiet", "power_ac")

    assert not result
    assert result.status is CommitStatus.ESCALATION_FAILED
    assert executor.staged_settings[-1].state_map["power_ac"] == "Quiet"
    assert len(emitted) == 1
    assert service.get_settings().state_map["power_ac"] == "Office"


def test_assign_unknown_profile_is_not_escalated(service, executor):
    result = service.set_active_profile("Missing", "power_ac")

    assert result.status is CommitStatus.NOT_FOUND
    assert executor.commands == []


def test_assign_without_settings_is_unavailable(service, executor, channel):
    channel.publish_settings(None)
    service.update_config_data()

    result = service.set_active_profile("Quiet", "power_ac")

    assert result.status is CommitStatus.UNAVAILABLE
    assert executor.commands == []


# =============================================================================
# copy_profile
# =============================================================================

@pytest.mark.asyncio
async def test_copy_builtin_profile(service, executor):
    result = await service.copy_profile("Quiet", "Quiet Copy")

    assert result
    assert [p.name for p in executor.staged_profiles[-1]] == ["Work", "Play", "Quiet Copy"]
    assert "--new_settings" not in executor.commands[-1]
    assert service.get_custom_profile_by_name("Quiet Copy") is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("new_name", ["Office", "Play", "Work"])
async def test_copy_rejects_existing_names(service, executor, new_name):
    result = await service.copy_profile("Work", new_name)

    assert result.status is CommitStatus.NAME_COLLISION
    assert executor.commands == []


@pytest.mark.asyncio
async def test_copy_unknown_source(service, executor):
    result = await service.copy_profile("Missing", "New")

    assert result.status is CommitStatus.NOT_FOUND
    assert executor.commands == []


@pytest.mark.asyncio
async def test_copy_rejected_by_helper_leaves_mirror_alone(service, executor):
    executor.accept = False

    result = await service.copy_profile("Work", "Work 2")

    assert result.status is CommitStatus.ESCALATION_FAILED
    assert [p.name for p in service.get_custom_profiles()] == ["Work", "Play"]


# =============================================================================
# delete_custom_profile
# =============================================================================

@pytest.mark.asyncio
async def test_delete_missing_profile(service, executor, channel):
    channel.publish_custom_profiles([make_profile("Work")])

    result = await service.delete_custom_profile("Missing")

    assert result.status is CommitStatus.NOT_FOUND
    assert [p.name for p in service.get_custom_profiles()] == ["Work"]
    assert executor.commands == []


@pytest.mark.asyncio
async def test_delete_builtin_profile_is_not_found(service, executor):
    result = await service.delete_custom_profile("Quiet")

    assert result.status is CommitStatus.NOT_FOUND
    assert executor.commands == []


@pytest.mark.asyncio
async def test_delete_custom_profile(service, executor):
    result = await service.delete_custom_profile("Play")

    assert result
    assert [p.name for p in executor.staged_profiles[-1]] == ["Work"]
    assert [p.name for p in service.get_custom_profiles()] == ["Work"]


# =============================================================================
# write_profile
# =============================================================================

@pytest.mark.asyncio
async def test_write_profile_keeping_its_name(service, executor):
    profile = service.get_custom_profile_by_name("Work")
    profile.cpu.governor = "performance"

    result = await service.write_profile("Work", profile)

    assert result
    assert service.get_custom_profile_by_name("Work").cpu.governor == "performance"
    assert executor.staged_settings[-1].state_map == {"power_ac": "Office", "power_bat": "Quiet"}


@pytest.mark.asyncio
async def test_write_profile_with_rename_and_states(service, executor):
    profile = service.get_custom_profile_by_name("Work")
    profile.name = "Office Hours"

    result = await service.write_profile("Work", profile, states=["power_ac", "power_bat"])

    assert result
    command = executor.commands[-1]
    assert "--new_settings" in command and "--new_profiles" in command
    assert len(executor.commands) == 1
    assert [p.name for p in service.get_custom_profiles()] == ["Office Hours", "Play"]
    assert service.get_settings().state_map == {"power_ac": "Office Hours", "power_bat": "Office Hours"}


@pytest.mark.asyncio
@pytest.mark.parametrize("taken_name", ["Play", "Quiet"])
async def test_write_profile_blocks_third_party_collision(service, executor, taken_name):
    profile = service.get_custom_profile_by_name("Work")
    profile.name = taken_name
    profile.cpu.governor = "performance"

    result = await service.write_profile("Work", profile, states=["power_ac"])

    assert result.status is CommitStatus.NAME_COLLISION
    assert executor.commands == []
    assert service.get_custom_profile_by_name("Work").cpu.governor == "powersave"
    assert service.get_settings().state_map["power_ac"] == "Office"


@pytest.mark.asyncio
async def test_write_profile_requires_custom_source(service, executor):
    result = await service.write_profile("Quiet", make_profile("Quiet"))

    assert result.status is CommitStatus.NOT_FOUND
    assert executor.commands == []


@pytest.mark.asyncio
async def test_write_profile_does_not_alias_caller_object(service):
    profile = service.get_custom_profile_by_name("Work")
    await service.write_profile("Work", profile)

    profile.cpu.governor = "performance"

    assert service.get_custom_profile_by_name("Work").cpu.governor == "powersave"


# =============================================================================
# save_settings
# =============================================================================

@pytest.mark.asyncio
async def test_save_settings_stages_both_payloads_unchanged(service, executor):
    result = await service.save_settings()

    assert result
    assert executor.staged_settings[-1].state_map == {"power_ac": "Office", "power_bat": "Quiet"}
    assert [p.name for p in executor.staged_profiles[-1]] == ["Work", "Play"]


@pytest.mark.asyncio
async def test_save_settings_without_settings(service, executor, channel):
    channel.publish_settings(None)
    service.update_config_data()

    result = await service.save_settings()

    assert result.status is CommitStatus.UNAVAILABLE
    assert executor.commands == []


# =============================================================================
# commit_editing_profile (blocking)
# =============================================================================

def test_commit_without_changes_does_nothing(service, executor):
    assert service.write_current_editing_profile().status is CommitStatus.NO_CHANGES

    service.set_current_editing_profile("Work")
    assert service.write_current_editing_profile().status is CommitStatus.NO_CHANGES
    assert executor.commands == []


def test_commit_cycle_resets_diff(service, executor):
    assert service.set_current_editing_profile("Work")
    assert not service.edit_profile_changes()

    service.get_current_editing_profile().fan.offset_fanspeed = 10
    assert service.edit_profile_changes()

    result = service.write_current_editing_profile()
    assert result
    assert not service.edit_profile_changes()

    assert service.set_current_editing_profile("Work")
    assert not service.edit_profile_changes()
    assert service.get_custom_profile_by_name("Work").fan.offset_fanspeed == 10


def test_commit_renamed_draft_follows_new_name(service, executor):
    service.set_current_editing_profile("Work")
    service.get_current_editing_profile().name = "Deep Work"

    assert service.write_current_editing_profile()
    assert service.session.origin_name == "Deep Work"
    assert not service.edit_profile_changes()
    assert [p.name for p in service.get_custom_profiles()] == ["Deep Work", "Play"]


def test_commit_renamed_draft_collision(service, executor):
    service.set_current_editing_profile("Work")
    service.get_current_editing_profile().name = "Office"

    result = service.write_current_editing_profile()

    assert result.status is CommitStatus.NAME_COLLISION
    assert executor.commands == []


def test_commit_after_origin_deleted_is_stale(service, executor, channel):
    service.set_current_editing_profile("Play")
    channel.publish_custom_profiles([make_profile("Work")])

    result = service.write_current_editing_profile()

    assert result.status is CommitStatus.STALE_DRAFT
    assert executor.commands == []


def test_commit_after_reorder_replaces_the_right_entry(service, executor, channel):
    service.set_current_editing_profile("Work")
    channel.publish_custom_profiles([make_profile("Extra"), make_profile("Play", "performance"), make_profile("Work")])
    service.get_current_editing_profile().cpu.no_turbo = True

    assert service.write_current_editing_profile()
    staged = executor.staged_profiles[-1]
    assert [p.name for p in staged] == ["Extra", "Play", "Work"]
    assert staged[2].cpu.no_turbo is True
    assert staged[1].cpu.governor == "performance"


def test_commit_rejected_by_helper_keeps_changes(service, executor):
    executor.accept = False
    service.set_current_editing_profile("Work")
    service.get_current_editing_profile().cpu.no_turbo = True

    result = service.write_current_editing_profile()

    assert result.status is CommitStatus.ESCALATION_FAILED
    assert service.edit_profile_changes()


# =============================================================================
# Cancellation
# =============================================================================

@pytest.mark.asyncio
async def test_cancelled_caller_does_not_stop_the_commit(service, executor):
    executor.gate = threading.Event()
    caller = asyncio.ensure_future(service.copy_profile("Work", "Work Copy"))
    await asyncio.sleep(0.05)

    caller.cancel()
    pending = list(service.pipeline._pending)
    executor.gate.set()
    await asyncio.wait(pending, timeout=5)

    assert caller.cancelled()
    assert service.get_custom_profile_by_name("Work Copy") is not None


def test_result_to_dict():
    from commit_pipeline import CommitResult

    assert CommitResult(CommitStatus.APPLIED).to_dict() == {"success": True, "status": "applied", "message": ""}
    assert CommitResult(CommitStatus.NOT_FOUND, "x").to_dict()["success"] is False
