"""Per-interface network byte counters."""

from __future__ import annotations

import psutil

from sysstats.models import InterfaceCounters


def collect_network_counters() -> list[InterfaceCounters]:
    counters = psutil.net_io_counters(pernic=True)
    return [
        InterfaceCounters(
            name=name,
            rx_bytes=int(iface.bytes_recv or 0),
            tx_bytes=int(iface.bytes_sent or 0),
        )
        for name, iface in counters.items()
    ]
