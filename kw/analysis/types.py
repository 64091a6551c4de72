# kw/analysis/types.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

@dataclass(frozen=True)
class DeviceInfo:
    """
    Network details resolved for one access point.

    Parameters
    ----------
    ssid : str
        Broadcast network name, empty if none was observed.
    first_seen : datetime
        First time Kismet saw the device (UTC).
    crypto : str
        WiGLE AuthMode label, e.g. "[WPA2-PSK-CCMP][ESS]".
    """
    ssid: str
    first_seen: datetime
    crypto: str

@dataclass
class ExportStats:
    """
    Counters collected while writing one report.

    Parameters
    ----------
    devices : int
        Access points resolved from the devices table.
    packets : int
        Eligible packets read from the packets table.
    rows : int
        Rows written to the report.
    skipped : int
        Packets dropped because their device was not resolved.
    """
    devices: int = 0
    packets: int = 0
    rows: int = 0
    skipped: int = 0
