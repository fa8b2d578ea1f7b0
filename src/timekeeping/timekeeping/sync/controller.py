from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    coordinator = container.coordinator

    def _status():
        state = coordinator.state
        return {
            "offline": state.is_offline,
            "syncing": state.is_syncing,
            "loading": state.is_loading,
            "lastSyncedAt": state.last_synced_at.isoformat() if state.last_synced_at else None,
            "employees": len(state.employees),
            "attendances": len(state.attendances),
            "companyTime": container.clock.now().isoformat(timespec="seconds"),
        }

    @app.route("/api/sync/status", methods=["GET"], endpoint="api_sync_status")
    def status():
        return jsonify(_status())

    @app.route("/api/sync/reload", methods=["POST"], endpoint="api_sync_reload")
    def reload():
        data = request.get_json(silent=True) or {}
        ran = coordinator.reload(force=bool(data.get("force", False)))
        return jsonify({"reloaded": ran, **_status()}), 200 if ran else 202
