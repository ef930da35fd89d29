"""The lifecycle hook surface handed to modules.

:class:`AppHooks` lists every subscription point of the host.  Modules
receive it in :meth:`~modkit.modules.Module.register_hooks` and bind
handlers on the points they care about::

    class AuditModule(Module):
        def register_hooks(self, app: AppHooks) -> None:
            app.on_record_after_create_success("posts").bind_func(self._audit)

Points that accept ``*tags`` return a :class:`TaggedHook`; a handler
bound through it only fires when the event's origin tags (collection or
table names) intersect the given tags.  Without tags it fires for all
events of that point.
"""

from __future__ import annotations

import abc

from modkit.hooks.hook import Hook, TaggedHook


class AppHooks(abc.ABC):
    """Named subscription points of the host application.

    Subclasses provide :meth:`hook`, which maps an event name from
    :data:`~modkit.hooks.events.KNOWN_EVENTS` to its :class:`Hook`.
    """

    @abc.abstractmethod
    def hook(self, name: str) -> Hook:
        """Return the hook registered under *name*."""

    def _tagged(self, name: str, tags: tuple[str, ...]) -> TaggedHook:
        return TaggedHook(self.hook(name), *tags)

    # -- Application events -----------------------------------------------

    def on_bootstrap(self) -> Hook:
        """Triggered when the host initialises its resources."""
        return self.hook("app.bootstrap")

    def on_terminate(self) -> Hook:
        """Triggered when the host is being terminated.

        The process may exit without awaiting the handlers.
        """
        return self.hook("app.terminate")

    def on_backup_create(self) -> Hook:
        return self.hook("backup.create")

    def on_backup_restore(self) -> Hook:
        return self.hook("backup.restore")

    # -- Model events -----------------------------------------------------

    def on_model_validate(self, *tags: str) -> TaggedHook:
        """Triggered every time a model is validated.

        Tags are table names.
        """
        return self._tagged("model.validate", tags)

    def on_model_create(self, *tags: str) -> TaggedHook:
        return self._tagged("model.create", tags)

    def on_model_create_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("model.create_execute", tags)

    def on_model_after_create_success(self, *tags: str) -> TaggedHook:
        return self._tagged("model.after_create_success", tags)

    def on_model_after_create_error(self, *tags: str) -> TaggedHook:
        return self._tagged("model.after_create_error", tags)

    def on_model_update(self, *tags: str) -> TaggedHook:
        return self._tagged("model.update", tags)

    def on_model_update_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("model.update_execute", tags)

    def on_model_after_update_success(self, *tags: str) -> TaggedHook:
        return self._tagged("model.after_update_success", tags)

    def on_model_after_update_error(self, *tags: str) -> TaggedHook:
        return self._tagged("model.after_update_error", tags)

    def on_model_delete(self, *tags: str) -> TaggedHook:
        return self._tagged("model.delete", tags)

    def on_model_delete_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("model.delete_execute", tags)

    def on_model_after_delete_success(self, *tags: str) -> TaggedHook:
        return self._tagged("model.after_delete_success", tags)

    def on_model_after_delete_error(self, *tags: str) -> TaggedHook:
        return self._tagged("model.after_delete_error", tags)

    # -- Record model events ----------------------------------------------

    def on_record_enrich(self, *tags: str) -> TaggedHook:
        """Triggered every time a record is enriched for a response.

        Tags are collection ids or names.
        """
        return self._tagged("record.enrich", tags)

    def on_record_validate(self, *tags: str) -> TaggedHook:
        return self._tagged("record.validate", tags)

    def on_record_create(self, *tags: str) -> TaggedHook:
        return self._tagged("record.create", tags)

    def on_record_create_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("record.create_execute", tags)

    def on_record_after_create_success(self, *tags: str) -> TaggedHook:
        return self._tagged("record.after_create_success", tags)

    def on_record_after_create_error(self, *tags: str) -> TaggedHook:
        return self._tagged("record.after_create_error", tags)

    def on_record_update(self, *tags: str) -> TaggedHook:
        return self._tagged("record.update", tags)

    def on_record_update_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("record.update_execute", tags)

    def on_record_after_update_success(self, *tags: str) -> TaggedHook:
        return self._tagged("record.after_update_success", tags)

    def on_record_after_update_error(self, *tags: str) -> TaggedHook:
        return self._tagged("record.after_update_error", tags)

    def on_record_delete(self, *tags: str) -> TaggedHook:
        return self._tagged("record.delete", tags)

    def on_record_delete_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("record.delete_execute", tags)

    def on_record_after_delete_success(self, *tags: str) -> TaggedHook:
        return self._tagged("record.after_delete_success", tags)

    def on_record_after_delete_error(self, *tags: str) -> TaggedHook:
        return self._tagged("record.after_delete_error", tags)

    # -- Collection model events ------------------------------------------

    def on_collection_validate(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.validate", tags)

    def on_collection_create(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.create", tags)

    def on_collection_create_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.create_execute", tags)

    def on_collection_after_create_success(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.after_create_success", tags)

    def on_collection_after_create_error(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.after_create_error", tags)

    def on_collection_update(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.update", tags)

    def on_collection_update_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.update_execute", tags)

    def on_collection_after_update_success(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.after_update_success", tags)

    def on_collection_after_update_error(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.after_update_error", tags)

    def on_collection_delete(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.delete", tags)

    def on_collection_delete_execute(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.delete_execute", tags)

    def on_collection_after_delete_success(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.after_delete_success", tags)

    def on_collection_after_delete_error(self, *tags: str) -> TaggedHook:
        return self._tagged("collection.after_delete_error", tags)

    # -- Mailer events ----------------------------------------------------

    def on_mailer_send(self) -> Hook:
        """Triggered every time a new email is sent."""
        return self.hook("mailer.send")

    def on_mailer_record_auth_alert_send(self, *tags: str) -> TaggedHook:
        return self._tagged("mailer.record_auth_alert_send", tags)

    def on_mailer_record_password_reset_send(self, *tags: str) -> TaggedHook:
        return self._tagged("mailer.record_password_reset_send", tags)

    def on_mailer_record_verification_send(self, *tags: str) -> TaggedHook:
        return self._tagged("mailer.record_verification_send", tags)

    def on_mailer_record_email_change_send(self, *tags: str) -> TaggedHook:
        return self._tagged("mailer.record_email_change_send", tags)

    def on_mailer_record_otp_send(self, *tags: str) -> TaggedHook:
        return self._tagged("mailer.record_otp_send", tags)

    # -- Realtime events --------------------------------------------------

    def on_realtime_connect_request(self) -> Hook:
        return self.hook("realtime.connect_request")

    def on_realtime_message_send(self) -> Hook:
        return self.hook("realtime.message_send")

    def on_realtime_subscribe_request(self) -> Hook:
        return self.hook("realtime.subscribe_request")

    # -- Settings events --------------------------------------------------

    def on_settings_list_request(self) -> Hook:
        return self.hook("settings.list_request")

    def on_settings_update_request(self) -> Hook:
        return self.hook("settings.update_request")

    def on_settings_reload(self) -> Hook:
        return self.hook("settings.reload")

    # -- File events ------------------------------------------------------

    def on_file_download_request(self, *tags: str) -> TaggedHook:
        return self._tagged("file.download_request", tags)

    def on_file_token_request(self, *tags: str) -> TaggedHook:
        return self._tagged("file.token_request", tags)

    # -- Record auth request events ---------------------------------------

    def on_record_auth_request(self, *tags: str) -> TaggedHook:
        """Triggered on every successful record authentication request."""
        return self._tagged("record.auth_request", tags)

    def on_record_auth_with_password_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.auth_with_password_request", tags)

    def on_record_auth_with_oauth2_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.auth_with_oauth2_request", tags)

    def on_record_auth_refresh_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.auth_refresh_request", tags)

    def on_record_request_password_reset_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.request_password_reset_request", tags)

    def on_record_confirm_password_reset_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.confirm_password_reset_request", tags)

    def on_record_request_verification_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.request_verification_request", tags)

    def on_record_confirm_verification_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.confirm_verification_request", tags)

    def on_record_request_email_change_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.request_email_change_request", tags)

    def on_record_confirm_email_change_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.confirm_email_change_request", tags)

    def on_record_request_otp_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.request_otp_request", tags)

    def on_record_auth_with_otp_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.auth_with_otp_request", tags)

    # -- Record CRUD request events ---------------------------------------

    def on_records_list_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.list_request", tags)

    def on_record_view_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.view_request", tags)

    def on_record_create_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.create_request", tags)

    def on_record_update_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.update_request", tags)

    def on_record_delete_request(self, *tags: str) -> TaggedHook:
        return self._tagged("record.delete_request", tags)

    # -- Collection CRUD request events -----------------------------------

    def on_collections_list_request(self) -> Hook:
        return self.hook("collection.list_request")

    def on_collection_view_request(self) -> Hook:
        return self.hook("collection.view_request")

    def on_collection_create_request(self) -> Hook:
        return self.hook("collection.create_request")

    def on_collection_update_request(self) -> Hook:
        return self.hook("collection.update_request")

    def on_collection_delete_request(self) -> Hook:
        return self.hook("collection.delete_request")

    def on_collections_import_request(self) -> Hook:
        return self.hook("collection.import_request")

    # -- Batch ------------------------------------------------------------

    def on_batch_request(self) -> Hook:
        """Triggered on each batch API request, before its sub-requests."""
        return self.hook("batch.request")
