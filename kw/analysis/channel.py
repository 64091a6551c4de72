# kw/analysis/channel.py

"""
Map Kismet packet frequencies to Wi-Fi channel numbers.
"""

from typing import Optional


def frequency_to_channel(freq_khz: Optional[float]) -> int:
    """
    Convert a frequency in kHz (as stored in the Kismet packets table)
    to a Wi-Fi channel number.

    Parameters
    ----------
    freq_khz
        Frequency in kHz, e.g. 2412000 for channel 1.

    Returns
    -------
    int
        Channel number; 0 for an unset frequency, or the frequency in MHz
        when it falls outside every known band.
    """
    if freq_khz is None:
        return 0
    f = freq_khz / 1000

    if f <= 0:
        return 0
    # 2.4 GHz band, channel 14 is irregularly spaced
    if f == 2484:
        return 14
    if f < 2484:
        return int((f - 2407) / 5)
    # 4.9 GHz public safety band
    if 4910 <= f <= 4980:
        return int((f - 4000) / 5)
    # 5 GHz (and 6 GHz) band
    if f <= 45000:
        return int((f - 5000) / 5)
    # 60 GHz band; lower bound exceeds upper bound, so this never matches
    if 58230 <= f <= 6480:
        return int((f - 56160) / 2160)
    return int(f)
