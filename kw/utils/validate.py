"""
Pydantic schemas to validate rows read from a Kismet database.
"""

from typing import Annotated, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class DeviceRecord(BaseModel):
    """
    One row of the Kismet `devices` table.
    """
    mac: str
    first_time: int
    avg_lat: Optional[float] = None
    avg_lon: Optional[float] = None
    device: Union[str, bytes]

class PacketRecord(BaseModel):
    """
    One row of the Kismet `packets` table.
    """
    ts_sec: int
    sourcemac: str
    phyname: Optional[str] = None
    lat: float
    lon: float
    signal: int
    frequency: float
    alt: float


# Capability blob (`devices.device` column). Only the keys used to
# resolve the SSID and crypt_set are modelled; everything else is ignored.
# crypt_set is a uint64 in Kismet; negative or fractional values are malformed.
CryptSet = Annotated[int, Field(strict=True, ge=0, le=2**64 - 1)]

class AdvertisedSSID(BaseModel):
    """
    Entry of `dot11.device.advertised_ssid_map`, also the shape of
    `dot11.device.last_beaconed_ssid_record`.
    """
    model_config = ConfigDict(populate_by_name=True)

    ssid: Optional[str] = Field(None, alias="dot11.advertisedssid.ssid")
    crypt_set: Optional[CryptSet] = Field(None, alias="dot11.advertisedssid.crypt_set")

class RespondedSSID(BaseModel):
    """
    Entry of `dot11.device.responded_ssid_map`.
    """
    model_config = ConfigDict(populate_by_name=True)

    ssid: Optional[str] = Field(None, alias="dot11.respondedssid.ssid")
    crypt_set: Optional[CryptSet] = Field(None, alias="dot11.respondedssid.crypt_set")

class Dot11Device(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    last_beaconed_ssid: Optional[str] = Field(
        None, alias="dot11.device.last_beaconed_ssid"
    )
    last_beaconed_ssid_record: Optional[AdvertisedSSID] = Field(
        None, alias="dot11.device.last_beaconed_ssid_record"
    )
    advertised_ssid_map: Optional[list[AdvertisedSSID]] = Field(
        None, alias="dot11.device.advertised_ssid_map"
    )
    responded_ssid_map: Optional[list[RespondedSSID]] = Field(
        None, alias="dot11.device.responded_ssid_map"
    )

class DeviceBlob(BaseModel):
    """
    Top level of the device JSON; the 802.11 data lives under `dot11.device`.
    """
    model_config = ConfigDict(populate_by_name=True)

    dot11: Optional[Dot11Device] = Field(None, alias="dot11.device")
