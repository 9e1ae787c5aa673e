from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Literal, Self

from pydantic import Field

from .common import GraphBaseModel, PolicyPayload


class ScheduledActionType(StrEnum):
    NOOP = "noAction"
    NOTIFICATION = "notification"
    BLOCK = "block"
    RETIRE = "retire"
    WIPE = "wipe"
    REMOTE_LOCK = "remoteLock"
    PUSH_NOTIFICATION = "pushNotification"


class ScheduledActionConfiguration(GraphBaseModel):
    action_type: ScheduledActionType = Field(alias="actionType")
    grace_period_hours: int = Field(default=0, alias="gracePeriodHours")
    notification_message_cc_list: tuple[str, ...] = Field(
        default=(), alias="notificationMessageCCList"
    )
    notification_template_id: str = Field(default="", alias="notificationTemplateId")


class ScheduledActionForRule(GraphBaseModel):
    rule_name: str = Field(alias="ruleName")
    scheduled_action_configurations: tuple[ScheduledActionConfiguration, ...] = Field(
        default=(), alias="scheduledActionConfigurations"
    )


def password_required_actions() -> tuple[ScheduledActionForRule, ...]:
    """Block after 12 hours and retire after 180 days of non-compliance."""

    return (
        ScheduledActionForRule(
            rule_name="PasswordRequired",
            scheduled_action_configurations=(
                ScheduledActionConfiguration(
                    action_type=ScheduledActionType.BLOCK,
                    grace_period_hours=12,
                ),
                ScheduledActionConfiguration(
                    action_type=ScheduledActionType.RETIRE,
                    grace_period_hours=4320,
                ),
            ),
        ),
    )


class Windows10CompliancePolicy(PolicyPayload):
    """Baseline Windows 10/11 compliance policy.

    Only the display name and description vary between policies; every
    other setting is fixed.
    """

    odata_type: Literal["#microsoft.graph.windows10CompliancePolicy"] = Field(
        default="#microsoft.graph.windows10CompliancePolicy",
        alias="@odata.type",
    )
    active_firewall_required: bool = Field(default=True, alias="activeFirewallRequired")
    anti_spyware_required: bool = Field(default=True, alias="antiSpywareRequired")
    antivirus_required: bool = Field(default=True, alias="antivirusRequired")
    bit_locker_enabled: bool = Field(default=True, alias="bitLockerEnabled")
    code_integrity_enabled: bool = Field(default=True, alias="codeIntegrityEnabled")
    defender_enabled: bool = Field(default=True, alias="defenderEnabled")
    device_threat_protection_enabled: bool = Field(
        default=False, alias="deviceThreatProtectionEnabled"
    )
    device_threat_protection_required_security_level: str = Field(
        default="unavailable", alias="deviceThreatProtectionRequiredSecurityLevel"
    )
    password_required_type: str = Field(
        default="deviceDefault", alias="passwordRequiredType"
    )
    role_scope_tag_ids: tuple[str, ...] = Field(default=("0",), alias="roleScopeTagIds")
    rtp_enabled: bool = Field(default=True, alias="rtpEnabled")
    scheduled_actions_for_rule: tuple[ScheduledActionForRule, ...] = Field(
        default_factory=password_required_actions,
        alias="scheduledActionsForRule",
    )
    secure_boot_enabled: bool = Field(default=True, alias="secureBootEnabled")
    signature_out_of_date: bool = Field(default=True, alias="signatureOutOfDate")
    tpm_required: bool = Field(default=True, alias="tpmRequired")

    @classmethod
    def template(cls, name: str, description: str = "") -> Self:
        return cls(display_name=name, description=description)


class CreatedCompliancePolicy(Windows10CompliancePolicy):
    """Compliance policy as returned by Graph after creation."""

    id: str = Field(alias="id")
    description: str | None = Field(default=None, alias="description")
    created_date_time: datetime | None = Field(default=None, alias="createdDateTime")
    last_modified_date_time: datetime | None = Field(
        default=None, alias="lastModifiedDateTime"
    )


__all__ = [
    "CreatedCompliancePolicy",
    "ScheduledActionConfiguration",
    "ScheduledActionForRule",
    "ScheduledActionType",
    "Windows10CompliancePolicy",
    "password_required_actions",
]
