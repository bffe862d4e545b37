"""
Export functionality for decoded frames.

Provides methods to export frames to various formats including DataFrame,
CSV, JSON, hex dump text, pcap and dict.

Examples:
    Export to pandas DataFrame:
        >>> from hexframe import read_pcap, to_dataframe
        >>> frames = read_pcap('traffic.pcap')
        >>> df = to_dataframe(frames)
        >>> print(df[['protocol', 'length', 'field.srcIp']])

    Export to CSV:
        >>> from hexframe import to_csv
        >>> to_csv(frames, 'output.csv')

    Using FrameExporter class:
        >>> from hexframe import FrameExporter
        >>> exporter = FrameExporter(include_fields=True)
        >>> exporter.save(frames, 'output.json')
        >>> exporter.save(frames, 'output.pcap')
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any
import json

if TYPE_CHECKING:
    from hexframe.core.frame import Frame


def _flatten(frame: Frame, include_fields: bool = True) -> dict[str, Any]:
    row = frame.to_dict()
    fields = row.pop('fields')
    if include_fields:
        for key, value in fields.items():
            row[f'field.{key}'] = value
    return row


def to_dataframe(frames: list[Frame], include_fields: bool = True) -> object:
    """
    Convert frames to pandas DataFrame.

    Creates a pandas DataFrame with one row per frame. Decoded fields are
    flattened into columns prefixed with 'field.' (e.g., 'field.dst_mac').
    Frames of different protocols leave the other protocols' columns empty.

    Args:
        frames: List of Frame objects
        include_fields: Whether to add decoded field columns (default: True)

    Returns:
        pandas DataFrame with one row per frame

    Raises:
        ImportError: If pandas is not installed

    Examples:
        >>> df = to_dataframe(read_pcap('traffic.pcap'))
        >>> # Only ARP frames
        >>> arp = df[df['protocol'] == 'arp']
        >>> print(arp['field.srcIp'])
    """
    try:
        import pandas as pd
    except ImportError:
        raise ImportError("pandas is required for DataFrame export. Install with: pip install pandas")

    return pd.DataFrame([_flatten(frame, include_fields) for frame in frames])


def to_dict(frames: list[Frame], include_fields: bool = True) -> list[dict]:
    """
    Convert frames to list of dictionaries.

    Args:
        frames: List of Frame objects
        include_fields: Whether to include decoded fields (default: True)

    Returns:
        List of dictionaries representing frames
    """
    result = []

    for frame in frames:
        frame_dict = frame.to_dict()
        if not include_fields:
            frame_dict.pop('fields')
        result.append(frame_dict)

    return result


def to_json(
    frames: list[Frame],
    path: str | Path,
    include_fields: bool = True,
    indent: int = 2
) -> None:
    """
    Export frames to JSON file.

    Args:
        frames: List of Frame objects
        path: Output JSON file path
        include_fields: Whether to include decoded fields (default: True)
        indent: JSON indentation level (default: 2)
    """
    path = Path(path)

    data = to_dict(frames, include_fields=include_fields)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, default=str)


def to_csv(
    frames: list[Frame],
    path: str | Path,
    include_fields: bool = True
) -> None:
    """
    Export frames to CSV file.

    Args:
        frames: List of Frame objects
        path: Output CSV file path
        include_fields: Whether to include decoded field columns (default: True)

    Raises:
        ImportError: If pandas is not installed
    """
    df = to_dataframe(frames, include_fields=include_fields)
    df.to_csv(path, index=False)


def to_hex_dump(frames: list[Frame], path: str | Path, bytes_per_line: int = 16) -> None:
    """
    Export frames as hex dump text, frames separated by a blank line.

    Args:
        frames: List of Frame objects
        path: Output text file path
        bytes_per_line: Bytes per dump line (default: 16)
    """
    dumps = [frame.to_hex_dump(bytes_per_line) for frame in frames]
    Path(path).write_text('\n\n'.join(dumps) + '\n', encoding='utf-8')


class FrameExporter:
    """
    Helper class for exporting frames in various formats.

    Attributes:
        include_fields: Whether to include decoded fields in exports
        bytes_per_line: Bytes per line in hex dump exports

    Examples:
        Auto-detect format by extension:
            >>> exporter = FrameExporter()
            >>> exporter.save(frames, 'output.csv')   # CSV
            >>> exporter.save(frames, 'output.json')  # JSON
            >>> exporter.save(frames, 'output.txt')   # hex dump
            >>> exporter.save(frames, 'output.pcap')  # pcap
    """

    def __init__(self, include_fields: bool = True, bytes_per_line: int = 16):
        if bytes_per_line <= 0:
            raise ValueError(f"bytes_per_line must be positive, got {bytes_per_line}")
        self.include_fields = include_fields
        self.bytes_per_line = bytes_per_line

    def to_dataframe(self, frames: list[Frame]) -> object:
        """Convert frames to pandas DataFrame."""
        return to_dataframe(frames, include_fields=self.include_fields)

    def to_dict(self, frames: list[Frame]) -> list[dict]:
        """Convert frames to list of dictionaries."""
        return to_dict(frames, include_fields=self.include_fields)

    def to_json(self, frames: list[Frame], path: str | Path, indent: int = 2) -> None:
        to_json(frames, path, include_fields=self.include_fields, indent=indent)

    def to_csv(self, frames: list[Frame], path: str | Path) -> None:
        to_csv(frames, path, include_fields=self.include_fields)

    def save(self, frames: list[Frame], path: str | Path) -> None:
        """
        Save frames to file based on extension.

        Automatically detects the output format from the file extension:
        - .json: JSON format
        - .csv: CSV format (requires pandas)
        - .txt: hex dump text
        - .pcap: Ethernet pcap (requires dpkt)

        Args:
            frames: List of Frame objects
            path: Output file path

        Raises:
            ValueError: If file extension is not supported
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix == '.json':
            self.to_json(frames, path)
        elif suffix == '.csv':
            self.to_csv(frames, path)
        elif suffix == '.txt':
            to_hex_dump(frames, path, self.bytes_per_line)
        elif suffix == '.pcap':
            from hexframe.core.reader import write_pcap
            write_pcap(path, frames)
        else:
            raise ValueError(f"Unsupported file extension: {suffix}")
