"""Utility functions for ekstrap."""

import fcntl
import os
import re
from pathlib import Path

from ekstrap.constants import AWS_REGION_PATTERN


def is_aws_region(region: str) -> bool:
    """Check that a string looks like an AWS region name.

    Parameters
    ----------
    region : str
        Candidate region (e.g., "us-east-1", "us-gov-west-1")

    Returns
    -------
    bool
        True if the string has the shape of a region name
    """
    return re.match(AWS_REGION_PATTERN, region) is not None


def atomic_file_write(path: Path, content: str, mode: int | None = None) -> None:
    """Write file atomically using temp file and rename with file locking.

    Uses exclusive file locking to prevent concurrent access during write.
    Writes to temporary file and renames to target atomically, so readers
    only ever see the old or the complete new content.

    Parameters
    ----------
    path : Path
        Target file path
    content : str
        File content to write
    mode : int | None
        Permission bits applied to the file before it is renamed into place

    Raises
    ------
    OSError
        Propagates any error from the write operation after cleanup
    """
    temp_path = path.with_suffix(path.suffix + ".tmp")
    lock_path = path.with_suffix(path.suffix + ".lock")

    try:
        with open(lock_path, "w") as lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                with open(temp_path, "w") as f:
                    f.write(content)
                if mode is not None:
                    os.chmod(temp_path, mode)
                temp_path.rename(path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink()
                raise
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)
    finally:
        try:
            lock_path.unlink()
        except OSError:
            pass


def get_aws_credentials_error_message() -> str:
    """Get standard AWS credentials error message.

    Returns
    -------
    str
        Formatted AWS credentials error message
    """
    return (
        "AWS credentials not found\n\n"
        "On a worker node, attach an instance profile that allows ec2:DescribeInstances.\n\n"
        "Elsewhere, configure your credentials:\n"
        "  aws configure\n\n"
        "Or set environment variables:\n"
        "  export AWS_ACCESS_KEY_ID=...\n"
        "  export AWS_SECRET_ACCESS_KEY=..."
    )
