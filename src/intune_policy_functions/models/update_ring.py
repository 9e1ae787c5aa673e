from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Literal, Self

from pydantic import Field

from .common import GraphBaseModel, PolicyPayload


class AutomaticUpdateMode(StrEnum):
    USER_DEFINED = "userDefined"
    NOTIFY_DOWNLOAD = "notifyDownload"
    AUTO_INSTALL_AT_MAINTENANCE_TIME = "autoInstallAtMaintenanceTime"
    AUTO_INSTALL_AND_REBOOT_AT_MAINTENANCE_TIME = "autoInstallAndRebootAtMaintenanceTime"
    AUTO_INSTALL_AND_REBOOT_AT_SCHEDULED_TIME = "autoInstallAndRebootAtScheduledTime"
    AUTO_INSTALL_AND_REBOOT_WITHOUT_END_USER_CONTROL = (
        "autoInstallAndRebootWithoutEndUserControl"
    )
    WINDOWS_DEFAULT = "windowsDefault"


class UpdateNotificationLevel(StrEnum):
    NOT_CONFIGURED = "notConfigured"
    DEFAULT_NOTIFICATIONS = "defaultNotifications"
    RESTART_WARNINGS_ONLY = "restartWarningsOnly"
    DISABLE_ALL_NOTIFICATIONS = "disableAllNotifications"


class WindowsUpdateActiveHoursInstall(GraphBaseModel):
    odata_type: Literal["#microsoft.graph.windowsUpdateActiveHoursInstall"] = Field(
        default="#microsoft.graph.windowsUpdateActiveHoursInstall",
        alias="@odata.type",
    )
    active_hours_start: str = Field(default="08:00:00.0000000", alias="activeHoursStart")
    active_hours_end: str = Field(default="17:00:00.0000000", alias="activeHoursEnd")


class WindowsUpdateForBusinessConfiguration(PolicyPayload):
    """Update ring deferring quality updates by ten days with 5-day deadlines."""

    odata_type: Literal["#microsoft.graph.windowsUpdateForBusinessConfiguration"] = (
        Field(
            default="#microsoft.graph.windowsUpdateForBusinessConfiguration",
            alias="@odata.type",
        )
    )
    allow_windows11_upgrade: bool = Field(default=True, alias="allowWindows11Upgrade")
    automatic_update_mode: AutomaticUpdateMode = Field(
        default=AutomaticUpdateMode.AUTO_INSTALL_AT_MAINTENANCE_TIME,
        alias="automaticUpdateMode",
    )
    auto_restart_notification_dismissal: str = Field(
        default="notConfigured", alias="autoRestartNotificationDismissal"
    )
    business_ready_updates_only: str = Field(
        default="userDefined", alias="businessReadyUpdatesOnly"
    )
    deadline_for_feature_updates_in_days: int | None = Field(
        default=5, alias="deadlineForFeatureUpdatesInDays"
    )
    deadline_for_quality_updates_in_days: int | None = Field(
        default=5, alias="deadlineForQualityUpdatesInDays"
    )
    deadline_grace_period_in_days: int | None = Field(
        default=3, alias="deadlineGracePeriodInDays"
    )
    drivers_excluded: bool = Field(default=False, alias="driversExcluded")
    engaged_restart_deadline_in_days: int | None = Field(
        default=None, alias="engagedRestartDeadlineInDays"
    )
    engaged_restart_snooze_schedule_for_feature_updates_in_days: int | None = Field(
        default=None, alias="engagedRestartSnoozeScheduleForFeatureUpdatesInDays"
    )
    engaged_restart_snooze_schedule_in_days: int | None = Field(
        default=None, alias="engagedRestartSnoozeScheduleInDays"
    )
    engaged_restart_transition_schedule_for_feature_updates_in_days: int | None = (
        Field(
            default=None,
            alias="engagedRestartTransitionScheduleForFeatureUpdatesInDays",
        )
    )
    engaged_restart_transition_schedule_in_days: int | None = Field(
        default=None, alias="engagedRestartTransitionScheduleInDays"
    )
    feature_updates_deferral_period_in_days: int = Field(
        default=0, alias="featureUpdatesDeferralPeriodInDays"
    )
    feature_updates_paused: bool = Field(default=False, alias="featureUpdatesPaused")
    feature_updates_rollback_window_in_days: int = Field(
        default=10, alias="featureUpdatesRollbackWindowInDays"
    )
    installation_schedule: WindowsUpdateActiveHoursInstall = Field(
        default_factory=WindowsUpdateActiveHoursInstall,
        alias="installationSchedule",
    )
    microsoft_update_service_allowed: bool = Field(
        default=True, alias="microsoftUpdateServiceAllowed"
    )
    postpone_reboot_until_after_deadline: bool = Field(
        default=False, alias="postponeRebootUntilAfterDeadline"
    )
    quality_updates_deferral_period_in_days: int = Field(
        default=10, alias="qualityUpdatesDeferralPeriodInDays"
    )
    quality_updates_paused: bool = Field(default=False, alias="qualityUpdatesPaused")
    role_scope_tag_ids: tuple[str, ...] = Field(default=(), alias="roleScopeTagIds")
    schedule_imminent_restart_warning_in_minutes: int | None = Field(
        default=None, alias="scheduleImminentRestartWarningInMinutes"
    )
    schedule_restart_warning_in_hours: int | None = Field(
        default=None, alias="scheduleRestartWarningInHours"
    )
    skip_checks_before_restart: bool = Field(
        default=False, alias="skipChecksBeforeRestart"
    )
    update_notification_level: UpdateNotificationLevel = Field(
        default=UpdateNotificationLevel.RESTART_WARNINGS_ONLY,
        alias="updateNotificationLevel",
    )
    update_weeks: str | None = Field(default=None, alias="updateWeeks")
    user_pause_access: str = Field(default="enabled", alias="userPauseAccess")
    user_windows_update_scan_access: str = Field(
        default="enabled", alias="userWindowsUpdateScanAccess"
    )

    @classmethod
    def template(cls, name: str, description: str = "") -> Self:
        return cls(display_name=name, description=description)


class CreatedUpdateRingPolicy(WindowsUpdateForBusinessConfiguration):
    """Update ring configuration as returned by Graph after creation."""

    id: str = Field(alias="id")
    description: str | None = Field(default=None, alias="description")
    created_date_time: datetime | None = Field(default=None, alias="createdDateTime")
    last_modified_date_time: datetime | None = Field(
        default=None, alias="lastModifiedDateTime"
    )


__all__ = [
    "AutomaticUpdateMode",
    "CreatedUpdateRingPolicy",
    "UpdateNotificationLevel",
    "WindowsUpdateActiveHoursInstall",
    "WindowsUpdateForBusinessConfiguration",
]
