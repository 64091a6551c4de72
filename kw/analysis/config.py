# kw/analysis/config.py

from dataclasses import dataclass

@dataclass(frozen=True)
class BannerConfig:
    """
    Tool metadata written in the first line of a WiGLE CSV file.

    Attributes
    ----------
    tool, version
        Format identifier understood by WiGLE.
    app_release
        Release of the producing application.
    model, release, device, display, board, brand
        Free-form description of the capture hardware.
    """
    tool:        str = "WigleWifi"
    version:     str = "1.4"
    app_release: str = "1.0"
    model:       str = "cagertronix"
    release:     str = "11.0.0"
    device:      str = "some-pi"
    display:     str = ""
    board:       str = "zero"
    brand:       str = "any"

    @classmethod
    def default(cls):
        """Metadata used when nothing is overridden."""
        return cls()

    @classmethod
    def from_version(cls, app_release: str):
        """Default metadata stamped with the given application release."""
        return cls(app_release=app_release)

    def line(self) -> str:
        """Render the banner line (without trailing newline)."""
        return (
            f"{self.tool}-{self.version},appRelease={self.app_release},"
            f"model={self.model},release={self.release},device={self.device},"
            f"display={self.display},board={self.board},brand={self.brand}"
        )
