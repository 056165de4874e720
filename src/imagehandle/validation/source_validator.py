"""
Source File Validation

Checks a source path before any decoding is attempted.
"""

import os
from pathlib import Path
from typing import Optional, Tuple


class SourceValidator:
    """Validate source files before loading"""

    @staticmethod
    def validate_file(file_path: Path) -> Tuple[bool, Optional[str]]:
        """
        Validate a source file.

        Checks:
        - File exists
        - Path is a regular file
        - File is readable

        Args:
            file_path: Path to image file

        Returns:
            (is_valid, error_message) tuple
        """
        if not file_path.exists():
            return False, f'File "{file_path}" not found'

        if not file_path.is_file():
            return False, f'Not a file: "{file_path}"'

        if not os.access(file_path, os.R_OK):
            return False, f'File "{file_path}" is not readable'

        return True, None

    @staticmethod
    def is_valid(file_path: Path) -> bool:
        """
        Quick check if file is valid.

        Args:
            file_path: Path to image file

        Returns:
            True if file is valid
        """
        valid, _ = SourceValidator.validate_file(file_path)
        return valid
