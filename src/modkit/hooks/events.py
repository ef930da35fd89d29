"""Canonical hook event definitions.

Single source of truth for every lifecycle/event subscription point of
the host application, its :class:`~modkit.hooks.surface.AppHooks`
method name and whether it accepts tags.

This module has **zero** internal dependencies and can be imported
from anywhere without circular import risk.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HookSpec:
    """One named subscription point of the hook surface."""

    name: str
    method: str
    tagged: bool = False


def _family(kind: str, *, tagged: bool) -> tuple[HookSpec, ...]:
    """Validate/create/update/delete family of a persisted kind."""
    specs = [HookSpec(f"{kind}.validate", f"on_{kind}_validate", tagged)]
    for action in ("create", "update", "delete"):
        specs.extend(
            (
                HookSpec(f"{kind}.{action}", f"on_{kind}_{action}", tagged),
                HookSpec(
                    f"{kind}.{action}_execute",
                    f"on_{kind}_{action}_execute",
                    tagged,
                ),
                HookSpec(
                    f"{kind}.after_{action}_success",
                    f"on_{kind}_after_{action}_success",
                    tagged,
                ),
                HookSpec(
                    f"{kind}.after_{action}_error",
                    f"on_{kind}_after_{action}_error",
                    tagged,
                ),
            )
        )
    return tuple(specs)


HOOK_SPECS: tuple[HookSpec, ...] = (
    # -- application ------------------------------------------------------
    HookSpec("app.bootstrap", "on_bootstrap"),
    HookSpec("app.terminate", "on_terminate"),
    HookSpec("backup.create", "on_backup_create"),
    HookSpec("backup.restore", "on_backup_restore"),
    # -- persisted models -------------------------------------------------
    *_family("model", tagged=True),
    HookSpec("record.enrich", "on_record_enrich", True),
    *_family("record", tagged=True),
    *_family("collection", tagged=True),
    # -- mailer -----------------------------------------------------------
    HookSpec("mailer.send", "on_mailer_send"),
    HookSpec("mailer.record_auth_alert_send", "on_mailer_record_auth_alert_send", True),
    HookSpec(
        "mailer.record_password_reset_send",
        "on_mailer_record_password_reset_send",
        True,
    ),
    HookSpec(
        "mailer.record_verification_send",
        "on_mailer_record_verification_send",
        True,
    ),
    HookSpec(
        "mailer.record_email_change_send",
        "on_mailer_record_email_change_send",
        True,
    ),
    HookSpec("mailer.record_otp_send", "on_mailer_record_otp_send", True),
    # -- realtime ---------------------------------------------------------
    HookSpec("realtime.connect_request", "on_realtime_connect_request"),
    HookSpec("realtime.message_send", "on_realtime_message_send"),
    HookSpec("realtime.subscribe_request", "on_realtime_subscribe_request"),
    # -- settings ---------------------------------------------------------
    HookSpec("settings.list_request", "on_settings_list_request"),
    HookSpec("settings.update_request", "on_settings_update_request"),
    HookSpec("settings.reload", "on_settings_reload"),
    # -- files ------------------------------------------------------------
    HookSpec("file.download_request", "on_file_download_request", True),
    HookSpec("file.token_request", "on_file_token_request", True),
    # -- record authentication flow ---------------------------------------
    HookSpec("record.auth_request", "on_record_auth_request", True),
    HookSpec(
        "record.auth_with_password_request",
        "on_record_auth_with_password_request",
        True,
    ),
    HookSpec(
        "record.auth_with_oauth2_request",
        "on_record_auth_with_oauth2_request",
        True,
    ),
    HookSpec("record.auth_refresh_request", "on_record_auth_refresh_request", True),
    HookSpec(
        "record.request_password_reset_request",
        "on_record_request_password_reset_request",
        True,
    ),
    HookSpec(
        "record.confirm_password_reset_request",
        "on_record_confirm_password_reset_request",
        True,
    ),
    HookSpec(
        "record.request_verification_request",
        "on_record_request_verification_request",
        True,
    ),
    HookSpec(
        "record.confirm_verification_request",
        "on_record_confirm_verification_request",
        True,
    ),
    HookSpec(
        "record.request_email_change_request",
        "on_record_request_email_change_request",
        True,
    ),
    HookSpec(
        "record.confirm_email_change_request",
        "on_record_confirm_email_change_request",
        True,
    ),
    HookSpec("record.request_otp_request", "on_record_request_otp_request", True),
    HookSpec("record.auth_with_otp_request", "on_record_auth_with_otp_request", True),
    # -- record CRUD requests ---------------------------------------------
    HookSpec("record.list_request", "on_records_list_request", True),
    HookSpec("record.view_request", "on_record_view_request", True),
    HookSpec("record.create_request", "on_record_create_request", True),
    HookSpec("record.update_request", "on_record_update_request", True),
    HookSpec("record.delete_request", "on_record_delete_request", True),
    # -- collection CRUD requests -----------------------------------------
    HookSpec("collection.list_request", "on_collections_list_request"),
    HookSpec("collection.view_request", "on_collection_view_request"),
    HookSpec("collection.create_request", "on_collection_create_request"),
    HookSpec("collection.update_request", "on_collection_update_request"),
    HookSpec("collection.delete_request", "on_collection_delete_request"),
    HookSpec("collection.import_request", "on_collections_import_request"),
    # -- batch ------------------------------------------------------------
    HookSpec("batch.request", "on_batch_request"),
)

EVENT_METHOD_MAP: dict[str, str] = {spec.name: spec.method for spec in HOOK_SPECS}

TAGGED_EVENTS: frozenset[str] = frozenset(
    spec.name for spec in HOOK_SPECS if spec.tagged
)

KNOWN_EVENTS: frozenset[str] = frozenset(EVENT_METHOD_MAP.keys())
