# kw/analysis/crypt.py

"""
Decode Kismet 802.11 crypt_set bitmasks into WiGLE AuthMode labels.

The label is a run of bracketed tokens, e.g. "[WPA-PSK-CCMP] [WPA2-PSK-CCMP][ESS]".
"""

from enum import IntFlag


class Crypt(IntFlag):
    """
    Kismet dot11 crypt_set bits.
    """
    NONE              = 0
    UNKNOWN           = 1 << 0
    WEP               = 1 << 1
    LAYER3            = 1 << 2
    WEP40             = 1 << 3
    WEP104            = 1 << 4
    TKIP              = 1 << 5
    WPA               = 1 << 6
    PSK               = 1 << 7
    AES_OCB           = 1 << 8
    AES_CCM           = 1 << 9
    WPA_MIGMODE       = 1 << 10
    EAP               = 1 << 11
    LEAP              = 1 << 12
    TTLS              = 1 << 13
    TLS               = 1 << 14
    PEAP              = 1 << 15
    SAE               = 1 << 16
    WPA_OWE           = 1 << 17
    # bits 18 and 19 are reserved
    ISAKMP            = 1 << 20
    PPTP              = 1 << 21
    FORTRESS          = 1 << 22
    KEYGUARD          = 1 << 23
    UNKNOWN_PROTECTED = 1 << 24
    UNKNOWN_NONWEP    = 1 << 25
    WPS               = 1 << 26
    VERSION_WPA       = 1 << 27
    VERSION_WPA2      = 1 << 28
    VERSION_WPA3      = 1 << 29


# Low protection bits; WEP is only reported when nothing else in here is set.
PROTECT_MASK = 0xFFFF

WPA_FAMILY = Crypt.WPA | Crypt.VERSION_WPA | Crypt.VERSION_WPA2 | Crypt.VERSION_WPA3

ESS = "[ESS]"


def _cipher(mask: int) -> str:
    tkip = bool(mask & Crypt.TKIP)
    ccmp = bool(mask & Crypt.AES_CCM)
    if tkip and ccmp:
        return "CCMP+TKIP"
    if tkip:
        return "TKIP"
    if ccmp:
        return "CCMP"
    return ""


def _auth(mask: int) -> str:
    if mask & Crypt.PSK:
        return "PSK"
    if mask & Crypt.EAP:
        return "EAP"
    if mask & Crypt.WPA_OWE:
        return "OWE"
    return ""


def security_label(mask: int) -> str:
    """
    Render a crypt_set bitmask as a WiGLE AuthMode string.

    Parameters
    ----------
    mask
        Kismet crypt_set value (unsigned). Unknown bits are ignored.

    Returns
    -------
    str
        Space separated tokens followed by "[ESS]", e.g. "[WEP][ESS]".
        An empty mask yields just "[ESS]".
    """
    tokens: list[str] = []

    if mask & Crypt.WPS:
        tokens.append("[WPS]")
    if mask & PROTECT_MASK == Crypt.WEP:
        tokens.append("[WEP]")

    if mask & WPA_FAMILY:
        suffix = f"{_auth(mask)}-{_cipher(mask)}"
        has_wpa = bool(mask & Crypt.VERSION_WPA)
        has_wpa2 = bool(mask & Crypt.VERSION_WPA2)
        if has_wpa and has_wpa2:
            tokens.append(f"[WPA-{suffix}]")
            tokens.append(f"[WPA2-{suffix}]")
        elif has_wpa2:
            tokens.append(f"[WPA2-{suffix}]")
        else:
            # WPA3 / SAE have no token of their own in the WiGLE output yet
            tokens.append(f"[WPA-{suffix}]")

    return " ".join(tokens).strip() + ESS
