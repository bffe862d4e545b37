"""
PCAP file import/export of Ethernet frames.

Frames are read as canonical hex strings so they can go straight into the
detector and decoder, and written from hex, bytes or ``Frame`` records.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Iterator
import time

if TYPE_CHECKING:
    from hexframe.core.frame import Frame


# DLT (Data Link Type) constants
DLT_EN10MB = 1         # Ethernet


class PcapReader:
    """
    PCAP/PCAPNG reader yielding frames as canonical hex.

    Only Ethernet captures decode meaningfully; other link types are read
    but their frames are reported as-is.
    """

    def __init__(self, pcap_path: str | Path):
        self.pcap_path = Path(pcap_path)
        self._reader: Any | None = None
        self._file = None
        self._link_layer_type: int | None = None

    def open(self) -> None:
        """Open the PCAP file and initialize reader."""
        import dpkt

        if not self.pcap_path.exists():
            raise FileNotFoundError(f"PCAP file not found: {self.pcap_path}")

        f = open(self.pcap_path, 'rb')
        try:
            self._reader = dpkt.pcap.UniversalReader(f)
            self._file = f
            self._link_layer_type = self._reader.datalink()
        except ValueError as e:
            f.close()
            raise ValueError(f"Unknown PCAP format: {e}")

    def close(self) -> None:
        """Close the PCAP file."""
        self._reader = None
        if self._file:
            self._file.close()
            self._file = None

    def __enter__(self) -> PcapReader:
        self.open()
        return self

    def __exit__(self, *args) -> None:
        self.close()

    @property
    def link_layer_type(self) -> int:
        """Get the DLT link layer type."""
        if self._link_layer_type is None:
            raise RuntimeError("Reader not opened")
        return self._link_layer_type

    @property
    def is_ethernet(self) -> bool:
        return self.link_layer_type == DLT_EN10MB

    def __iter__(self) -> Iterator[tuple[float, str]]:
        """Iterate over (timestamp, canonical hex) pairs."""
        if self._reader is None:
            raise RuntimeError("Reader not opened. Call open() first.")

        for ts, buf in self._reader:
            yield float(ts), bytes(buf).hex().upper()

    def frames(self) -> Iterator[Frame]:
        """Iterate over decoded frames."""
        from hexframe.core.frame import Frame

        name = self.pcap_path.name
        for index, (ts, hex_data) in enumerate(self):
            yield Frame.from_hex(hex_data, timestamp=ts, name=f"{name}#{index}")


def read_pcap(pcap_path: str | Path) -> list[Frame]:
    """Read and decode every frame of a capture file."""
    with PcapReader(pcap_path) as reader:
        return list(reader.frames())


def _frame_bytes(frame: Frame | bytes | str) -> tuple[bytes, float | None]:
    if isinstance(frame, (bytes, bytearray)):
        return bytes(frame), None
    if isinstance(frame, str):
        from hexframe.core.hexdump import normalize_hex
        return bytes.fromhex(normalize_hex(frame)), None
    return frame.to_bytes(), frame.timestamp


def write_pcap(
    pcap_path: str | Path,
    frames: Iterable[Frame | bytes | str],
    snaplen: int = 65535,
) -> int:
    """
    Write frames to an Ethernet pcap file.

    Args:
        pcap_path: Output file path
        frames: ``Frame`` records, raw bytes or hex strings
        snaplen: Snapshot length written to the file header (default: 65535)

    Returns:
        Number of frames written
    """
    import dpkt

    count = 0
    now = time.time()
    with open(pcap_path, 'wb') as f:
        writer = dpkt.pcap.Writer(f, snaplen=snaplen, linktype=DLT_EN10MB)
        for frame in frames:
            data, ts = _frame_bytes(frame)
            writer.writepkt(data, ts=now + count * 1e-6 if ts is None else ts)
            count += 1
    return count
