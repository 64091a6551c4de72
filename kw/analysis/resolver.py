"""
Resolve access point SSID, first-seen time and AuthMode from Kismet device records.

The SSID and crypt_set are taken from the first of these sources that
carries a non-empty name:
  1. dot11.device.last_beaconed_ssid (name only, crypt_set 0)
  2. dot11.device.last_beaconed_ssid_record
  3. dot11.device.advertised_ssid_map[0]
  4. dot11.device.responded_ssid_map[0]
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, Iterator, Tuple

from pydantic import ValidationError

from kw.analysis.crypt import security_label
from kw.analysis.types import DeviceInfo
from kw.utils.log import get_logger
from kw.utils.validate import DeviceBlob, Dot11Device, DeviceRecord

logger = get_logger(__name__)


class CapabilityParseError(ValueError):
    """
    Raised when a device JSON blob cannot be parsed.
    """
    def __init__(self, mac: str, cause: Exception) -> None:
        super().__init__(f"malformed device JSON for {mac}: {cause}")
        self.mac = mac
        self.cause = cause


def _candidates(dot11: Dot11Device) -> Iterator[Tuple[str | None, int | None]]:
    # generator so later sources are only looked at when earlier ones are empty
    yield dot11.last_beaconed_ssid, 0
    rec = dot11.last_beaconed_ssid_record
    if rec is not None:
        yield rec.ssid, rec.crypt_set
    if dot11.advertised_ssid_map:
        first = dot11.advertised_ssid_map[0]
        yield first.ssid, first.crypt_set
    if dot11.responded_ssid_map:
        first = dot11.responded_ssid_map[0]
        yield first.ssid, first.crypt_set


def select_network(blob: DeviceBlob) -> Tuple[str, int]:
    """
    Pick the SSID and crypt_set for a device.

    Returns
    -------
    Tuple[str, int]
        (ssid, crypt_set); ("", 0) when no source names a network.
    """
    if blob.dot11 is None:
        return "", 0
    for ssid, crypt_set in _candidates(blob.dot11):
        if ssid:
            return ssid, crypt_set or 0
    return "", 0


def resolve_device(record: DeviceRecord) -> DeviceInfo:
    """
    Build the DeviceInfo for a single device record.

    Raises
    ------
    CapabilityParseError
        If the device JSON is not valid or has unexpected types.
    """
    try:
        blob = DeviceBlob.model_validate_json(record.device)
    except ValidationError as e:
        raise CapabilityParseError(record.mac, e) from e

    ssid, crypt_set = select_network(blob)
    return DeviceInfo(
        ssid=ssid,
        first_seen=datetime.fromtimestamp(record.first_time, tz=timezone.utc),
        crypto=security_label(crypt_set),
    )


def resolve_devices(records: Iterable[DeviceRecord]) -> dict[str, DeviceInfo]:
    """
    Resolve every device record into a mapping keyed by MAC.

    A later record with the same MAC replaces the earlier one. Any
    CapabilityParseError aborts the whole pass.
    """
    devices: dict[str, DeviceInfo] = {}
    for record in records:
        if record.mac in devices:
            logger.debug("Duplicate device %s, keeping latest record", record.mac)
        devices[record.mac] = resolve_device(record)
    logger.info("Resolved %d access points", len(devices))
    return devices
