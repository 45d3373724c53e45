"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Byte size conversions for --buffer-size and the run summaries.
Units are binary: 1KB = 1024 bytes.
"""
import re

_SIZE_PATTERN = re.compile(r"^(-?\d+(?:\.\d+)?)\s*([KMG]?)B?$", re.IGNORECASE)

_MULTIPLIERS = {"": 1, "K": 1024, "M": 1024 ** 2, "G": 1024 ** 3}

_DISPLAY_UNITS = ("B", "KB", "MB", "GB", "TB")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """Formats a byte count with two decimals, e.g. 1.50KB or 3.20MB."""
        value = float(max(size_bytes, 0))
        for unit in _DISPLAY_UNITS[:-1]:
            if value < 1024:
                return f"{value:.2f}{unit}"
            value /= 1024
        return f"{value:.2f}{_DISPLAY_UNITS[-1]}"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parses '65536', '512B', '64K', '64KB', '1.5MB', '1G' and the like.
        Raises ValueError for negative sizes or anything else.
        """
        match = _SIZE_PATTERN.match(size_str.strip())
        if not match:
            raise ValueError(f"Invalid size format: '{size_str.strip()}'. Examples: 65536, 64KB, 4MB, 1G")

        value = float(match.group(1))
        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str.strip()}'")
        return int(value * _MULTIPLIERS[match.group(2).upper()])

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False
