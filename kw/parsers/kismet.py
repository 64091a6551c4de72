"""
Kismet parser: read access point device records and geotagged packets from .kismet SQLite files.
"""

import sqlite3
from pathlib import Path
from typing import Iterator

from kw.storage.db import get_connection
from kw.utils.validate import DeviceRecord, PacketRecord

NULL_MAC = "00:00:00:00:00:00"
AP_TYPE = "Wi-Fi AP"


class KismetSource:
    """
    Row source over one .kismet file.

    Usable as a context manager; the connection is closed on exit.
    """

    def __init__(self, db_path: str | Path):
        self.db_path = db_path
        self.conn: sqlite3.Connection = get_connection(db_path)

    def __enter__(self) -> "KismetSource":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.conn.close()

    def devices(self) -> Iterator[DeviceRecord]:
        """
        Pull devmac, first_time, avg_lat, avg_lon, device JSON → DeviceRecord
        for Wi-Fi access points only.
        """
        for row in self.conn.execute(
            """
            SELECT devmac, first_time, avg_lat, avg_lon, device
              FROM devices
             WHERE devmac != ?
               AND type = ?
            """,
            (NULL_MAC, AP_TYPE),
        ):
            yield DeviceRecord(
                mac=row["devmac"],
                first_time=row["first_time"],
                avg_lat=row["avg_lat"],
                avg_lon=row["avg_lon"],
                device=row["device"],
            )

    def packets(self) -> Iterator[PacketRecord]:
        """
        Pull ts_sec, sourcemac, phyname, lat, lon, signal, frequency, alt → PacketRecord
        for packets with a source MAC and a GPS fix.
        """
        for row in self.conn.execute(
            """
            SELECT ts_sec, sourcemac, phyname, lat, lon, signal, frequency, alt
              FROM packets
             WHERE sourcemac != ?
               AND lat != 0
               AND lon != 0
            """,
            (NULL_MAC,),
        ):
            yield PacketRecord(
                ts_sec=row["ts_sec"],
                sourcemac=row["sourcemac"],
                phyname=row["phyname"],
                lat=row["lat"],
                lon=row["lon"],
                signal=row["signal"],
                frequency=row["frequency"],
                alt=row["alt"],
            )
