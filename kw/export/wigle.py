"""
WiGLE CSV 1.4 writer: join Kismet packets to resolved access points.

The device mapping is built completely before the first packet row is
written; packets whose device was never resolved are dropped.
"""

import csv
import math
from decimal import Decimal
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Protocol, TextIO

from kw.analysis.channel import frequency_to_channel
from kw.analysis.config import BannerConfig
from kw.analysis.resolver import resolve_devices
from kw.analysis.types import DeviceInfo, ExportStats
from kw.utils.log import get_logger
from kw.utils.validate import DeviceRecord, PacketRecord

logger = get_logger(__name__)

HEADER = [
    "MAC",
    "SSID",
    "AuthMode",
    "FirstSeen",
    "Channel",
    "RSSI",
    "CurrentLatitude",
    "CurrentLongitude",
    "AltitudeMeters",
    "AccuracyMeters",
    "Type",
]
FIRST_SEEN_FMT = "%Y-%m-%d %H:%M:%S"
ACCURACY = "0"
RECORD_TYPE = "WIFI"


class RowSource(Protocol):
    """
    Anything that can hand out filtered device and packet records.
    """
    def devices(self) -> Iterator[DeviceRecord]: ...
    def packets(self) -> Iterator[PacketRecord]: ...


def format_number(value: float | int) -> str:
    """
    Shortest round-trip text of a number.

    Floats use fixed notation while the decimal exponent is in [-4, 6) and
    `%g`-style exponent notation otherwise: 1.0 → "1", 1e6 → "1e+06", -0.0 → "-0".
    """
    if not isinstance(value, float):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    d = Decimal(repr(value)).normalize()
    sign, digits, exp = d.as_tuple()
    point = len(digits) + exp - 1
    if value == 0 or -4 <= point < 6:
        return format(d, "f")

    mantissa = "".join(map(str, digits))
    if len(mantissa) > 1:
        mantissa = f"{mantissa[0]}.{mantissa[1:]}"
    return f"{'-' if sign else ''}{mantissa}e{'+' if point >= 0 else '-'}{abs(point):02d}"


def build_row(packet: PacketRecord, devices: Mapping[str, DeviceInfo]) -> Optional[list[str]]:
    """
    Build one WiGLE row for a packet.

    Parameters
    ----------
    packet
        Eligible packet observation.
    devices
        Resolved access points keyed by MAC.

    Returns
    -------
    Optional[list[str]]
        The eleven column values, or None when the packet's device is unknown.
    """
    dev = devices.get(packet.sourcemac)
    if dev is None:
        return None
    return [
        packet.sourcemac,
        dev.ssid,
        dev.crypto,
        dev.first_seen.strftime(FIRST_SEEN_FMT),
        str(frequency_to_channel(packet.frequency)),
        # RSSI is passed through as Kismet recorded it
        str(packet.signal),
        format_number(packet.lat),
        format_number(packet.lon),
        format_number(packet.alt),
        ACCURACY,
        RECORD_TYPE,
    ]


def write_preamble(sink: TextIO, banner: BannerConfig) -> None:
    """
    Write the banner line and the column header line.
    """
    sink.write(banner.line() + "\n")
    sink.write(",".join(HEADER) + "\n")


def export_wigle(
    source: RowSource,
    sink: TextIO,
    banner: BannerConfig | None = None,
) -> ExportStats:
    """
    Write a complete WiGLE CSV report for `source` to `sink`.

    Parameters
    ----------
    source
        Row source, e.g. a KismetSource.
    sink
        Text stream to write to. Files should be opened with newline="".
    banner
        Tool metadata for the first line; BannerConfig.default() if omitted.

    Returns
    -------
    ExportStats
        Counts of resolved devices, packets read, rows written and skipped.
    """
    banner = banner or BannerConfig.default()
    stats = ExportStats()

    # phase 1: every device is resolved before any packet is read
    devices = MappingProxyType(resolve_devices(source.devices()))
    stats.devices = len(devices)

    write_preamble(sink, banner)
    writer = csv.writer(sink, lineterminator="\n")

    # phase 2: stream packets through the frozen mapping
    for packet in source.packets():
        stats.packets += 1
        row = build_row(packet, devices)
        if row is None:
            stats.skipped += 1
            logger.debug("No access point for packet from %s", packet.sourcemac)
            continue
        writer.writerow(row)
        stats.rows += 1

    logger.info(
        "Wrote %d rows from %d packets (%d skipped)",
        stats.rows, stats.packets, stats.skipped,
    )
    return stats
