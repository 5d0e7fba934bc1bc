"""Testes do FirestoreAuditStore com cliente mockado."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from app.infra.stores.firestore_audit_store import AUDIT_COLLECTION, FirestoreAuditStore


def _record() -> dict[str, object]:
    return {
        "timestamp": "2026-01-10T10:00:00+00:00",
        "event": "webhook_received",
        "payment_id": "123",
        "status": "approved",
        "duplicate": False,
    }


def test_append_writes_document_in_collection() -> None:
    client = MagicMock()
    store = FirestoreAuditStore(client)

    store.append(_record())

    client.collection.assert_called_once_with(AUDIT_COLLECTION)
    doc_id = client.collection.return_value.document.call_args[0][0]
    assert "_123_" in doc_id
    written = client.collection.return_value.document.return_value.set.call_args[0][0]
    assert written["payment_id"] == "123"
    assert written["timestamp"] == "2026-01-10T10:00:00+00:00"
    assert "created_at" in written


def test_custom_collection_name() -> None:
    client = MagicMock()
    FirestoreAuditStore(client, collection_name="audit_test").append(_record())
    client.collection.assert_called_once_with("audit_test")


def test_append_errors_are_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    client = MagicMock()
    client.collection.return_value.document.return_value.set.side_effect = RuntimeError("down")
    store = FirestoreAuditStore(client)

    with caplog.at_level("ERROR"):
        store.append(_record())

    assert any(r.getMessage() == "audit_append_error" for r in caplog.records)


@pytest.mark.asyncio
async def test_append_async_runs_in_thread() -> None:
    client = MagicMock()
    store = FirestoreAuditStore(client)

    await store.append_async(_record())

    client.collection.return_value.document.return_value.set.assert_called_once()
