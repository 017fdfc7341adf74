"""Schemas for the draw synchronisation API."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class SyncPageRequestSchema(Schema):
    """Body of ``POST /api/sync/<code>``; without ``page`` the cursor decides."""

    page = fields.Integer(required=False, load_default=None, validate=validate.Range(min=1))
    limit = fields.Integer(required=False, load_default=50, validate=validate.Range(min=1, max=100))


class SyncOutcomeSchema(Schema):
    lottery_code = fields.String(data_key="code")
    mode = fields.String()
    success = fields.Boolean()
    fetched = fields.Integer()
    inserted = fields.Integer()
    updated = fields.Integer()
    latest_issue = fields.String(data_key="latestIssue", allow_none=True)
    oldest_issue = fields.String(data_key="oldestIssue", allow_none=True)
    history_complete = fields.Boolean(data_key="historyComplete", allow_none=True)
    has_more = fields.Boolean(data_key="hasMore", allow_none=True)
    source = fields.String(allow_none=True)
    error = fields.String(allow_none=True)


class SyncStatusSchema(Schema):
    lottery_code = fields.String(data_key="code")
    last_synced_issue = fields.String(data_key="lastSyncedIssue", allow_none=True)
    last_synced_date = fields.Date(data_key="lastSyncedDate", allow_none=True)
    oldest_synced_issue = fields.String(data_key="oldestSyncedIssue", allow_none=True)
    is_history_complete = fields.Boolean(data_key="isHistoryComplete")
    last_sync_at = fields.DateTime(data_key="lastSyncAt", allow_none=True)
    sync_count = fields.Integer(data_key="syncCount")


class SyncStatusViewSchema(Schema):
    lottery_code = fields.String(data_key="code")
    status = fields.Nested(SyncStatusSchema, allow_none=True, data_key="syncStatus")
    record_count = fields.Integer(data_key="recordCount")
