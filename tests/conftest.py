"""
Shared fixtures: build small .kismet databases in a temp directory.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

import pytest

# Subset of the Kismet schema, enough for the exporter's queries.
KISMET_SCHEMA = """
CREATE TABLE devices (
    first_time INT,
    last_time INT,
    devkey TEXT,
    phyname TEXT,
    devmac TEXT,
    strongest_signal INT,
    avg_lat REAL,
    avg_lon REAL,
    type TEXT,
    device BLOB
);
CREATE TABLE packets (
    ts_sec INT,
    ts_usec INT,
    phyname TEXT,
    sourcemac TEXT,
    destmac TEXT,
    frequency REAL,
    lat REAL,
    lon REAL,
    alt REAL,
    signal INT
);
"""

PSK_WPA2_CCMP = (1 << 7) | (1 << 28) | (1 << 9)


def advertised(ssid: str, crypt_set: int = 0) -> dict:
    return {"dot11.advertisedssid.ssid": ssid, "dot11.advertisedssid.crypt_set": crypt_set}


def responded(ssid: str, crypt_set: int = 0) -> dict:
    return {"dot11.respondedssid.ssid": ssid, "dot11.respondedssid.crypt_set": crypt_set}


def device_json(**dot11) -> str:
    """Device blob with the given dot11.device.* keys (without prefix)."""
    return json.dumps(
        {
            "kismet.device.base.type": "Wi-Fi AP",
            "dot11.device": {f"dot11.device.{k}": v for k, v in dot11.items()},
        }
    )


class KismetDB:
    """Helper that writes rows into a throwaway .kismet file."""

    def __init__(self, path: Path):
        self.path = path
        self.conn = sqlite3.connect(path)
        self.conn.executescript(KISMET_SCHEMA)

    def add_device(
        self,
        mac: str,
        blob: str | bytes,
        first_time: int = 1700000000,
        type: str = "Wi-Fi AP",
    ) -> None:
        self.conn.execute(
            "INSERT INTO devices (first_time, last_time, phyname, devmac, avg_lat, avg_lon, type, device)"
            " VALUES (?, ?, 'IEEE802.11', ?, 0, 0, ?, ?)",
            (first_time, first_time, mac, type, blob),
        )
        self.conn.commit()

    def add_packet(
        self,
        mac: str,
        lat: float = 1.0,
        lon: float = 2.0,
        frequency: float = 2412000,
        signal: int = -50,
        alt: float = 10.0,
        ts_sec: int = 1700000100,
    ) -> None:
        self.conn.execute(
            "INSERT INTO packets (ts_sec, ts_usec, phyname, sourcemac, destmac, frequency, lat, lon, alt, signal)"
            " VALUES (?, 0, 'IEEE802.11', ?, 'FF:FF:FF:FF:FF:FF', ?, ?, ?, ?, ?)",
            (ts_sec, mac, frequency, lat, lon, alt, signal),
        )
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()


@pytest.fixture
def kismet_db(tmp_path):
    db = KismetDB(tmp_path / "capture.kismet")
    yield db
    db.close()


@pytest.fixture
def home_db(kismet_db):
    """One WPA2 access point named Home and one packet from it."""
    kismet_db.add_device(
        "AA:BB:CC:DD:EE:FF",
        device_json(advertised_ssid_map=[advertised("Home", PSK_WPA2_CCMP)]),
    )
    kismet_db.add_packet("AA:BB:CC:DD:EE:FF")
    return kismet_db
