"""Smoke test: serve real host telemetry and poll it a few times."""

from __future__ import annotations

import json
import sys
import threading
import time
import urllib.request
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sysstats.web.server import create_app  # noqa: E402


def fetch_json(url: str) -> dict[str, object]:
    with urllib.request.urlopen(url) as response:  # nosec - uso local en smoke test
        payload = response.read().decode("utf-8")
    return json.loads(payload)


def run_smoke(polls: int = 3) -> None:
    server = create_app(port=0)
    address = server.server_address()
    print(f"Iniciando servidor en {address}")

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        for _ in range(polls):
            current = fetch_json(f"{address}/api/stats")
            time.sleep(1.0)
        assert "cpu" in current, "Snapshot sin datos de CPU"
        assert len(current["cpu_history"]) == polls, "Histórico de CPU incompleto"
        print("SMOKE_OK", {
            "cpu": current["cpu"],
            "ram": current["ram"],
            "network_speed": current["network_speed"],
            "history_points": len(current["cpu_history"]),
        })
    finally:
        server.stop()
        thread.join()


if __name__ == "__main__":
    run_smoke()
