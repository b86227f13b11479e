"""Drink ledger Flask app.

Run from project root:
    python app.py
"""

from __future__ import annotations

import logging
import os
import threading

from flask import Flask, jsonify, request

from drink_ledger import config
from drink_ledger.calculations import format_amount
from drink_ledger.errors import ErrorKind, LedgerError, ValidationError
from drink_ledger.ledger import RecordLedger

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Held across load -> mutate -> save so threaded requests never overwrite each other.
_ledger_lock = threading.Lock()

ERROR_MESSAGES = {
    ErrorKind.MISSING_FIELD: "Please fill in every field",
    ErrorKind.STRENGTH_OUT_OF_RANGE: "Alcohol strength must be between 0 and 100",
    ErrorKind.VOLUME_INVALID: "Volume must be at least 1 ml",
    ErrorKind.QUOTA_EXCEEDED: "Storage is full. Delete old entries and try again",
    ErrorKind.STORAGE_UNAVAILABLE: "Storage is unavailable in this environment",
    ErrorKind.CORRUPT_DATA: "Saved data could not be read and was reset",
    ErrorKind.NOT_FOUND: "That entry no longer exists",
}

STATUS_CODES = {
    ErrorKind.MISSING_FIELD: 400,
    ErrorKind.STRENGTH_OUT_OF_RANGE: 400,
    ErrorKind.VOLUME_INVALID: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.QUOTA_EXCEEDED: 507,
    ErrorKind.STORAGE_UNAVAILABLE: 503,
}


def _open_ledger() -> tuple[RecordLedger, ErrorKind | None]:
    ledger = config.build_ledger()
    warning = ledger.load_from_store()
    return ledger, warning


def _error_response(exc: LedgerError):
    return jsonify({"error": ERROR_MESSAGES[exc.kind], "kind": exc.kind.value}), STATUS_CODES[exc.kind]


def _state_payload(ledger: RecordLedger, warning: ErrorKind | None = None) -> dict:
    records = ledger.get_all()
    return {
        "records": [r.to_dict() for r in reversed(records)],
        "drink_count": len(records),
        "total": float(format_amount(ledger.get_total())),
        "unit": ledger.unit,
        "warning": None if warning is None else {"kind": warning.value, "message": ERROR_MESSAGES[warning]},
    }


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/state")
def api_state():
    ledger, warning = _open_ledger()
    return jsonify(_state_payload(ledger, warning))


@app.route("/api/records", methods=["POST"])
def api_add_record():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error_response(ValidationError(ErrorKind.MISSING_FIELD))
    with _ledger_lock:
        ledger, warning = _open_ledger()
        try:
            record = ledger.add(data.get("name"), data.get("strength"), data.get("volume"))
        except LedgerError as exc:
            return _error_response(exc)
        payload = _state_payload(ledger, warning)
    payload["ok"] = True
    payload["record"] = record.to_dict()
    return jsonify(payload), 201


@app.route("/api/records/<record_id>", methods=["DELETE"])
def api_delete_record(record_id: str):
    with _ledger_lock:
        ledger, warning = _open_ledger()
        try:
            ledger.delete(record_id)
        except LedgerError as exc:
            return _error_response(exc)
        payload = _state_payload(ledger, warning)
    payload["ok"] = True
    return jsonify(payload)


@app.route("/api/reset", methods=["POST"])
def api_reset():
    with _ledger_lock:
        ledger, _ = _open_ledger()
        try:
            ledger.store.clear()
        except LedgerError as exc:
            return _error_response(exc)
    logger.info("Slot %r cleared", ledger.store.storage_key)
    return jsonify({"ok": True})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
