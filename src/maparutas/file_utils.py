#!/usr/bin/env python3
"""
Filename utilities for generating output filenames.
"""

from typing import Optional
import os
import logging

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 180


def _reserve(candidate: str) -> bool:
    """Create candidate exclusively; False if it already exists."""
    try:
        with open(candidate, "x"):
            pass
    except FileExistsError:
        return False
    except OSError as e:
        logger.error(f"Cannot create file {candidate}: {e}")
        raise ValueError(f"Cannot create file: {e}")
    return True


def generate_output_filename(input_filename: Optional[str] = None) -> str:
    """
    Generates an output HTML filename and reserves it by creating an empty file.

    The name is "<input without .gpx> map.html", or "route map.html" in the
    current directory when there is no input file. Taken names fall back to
    " (1)", " (2)", ... up to 180 attempts.

    Args:
        input_filename: Path to the input GPX file, if any

    Returns:
        Filename that has been created as an empty file to reserve it

    Raises:
        RuntimeError: If no available filename found after 180 attempts
        ValueError: If a filename cannot be created
    """
    if input_filename:
        directory = os.path.dirname(input_filename)
        base_name = os.path.basename(input_filename)
        if base_name.lower().endswith(".gpx"):
            base_name = base_name[:-4]
    else:
        directory = ""
        base_name = "route"

    base_output = os.path.join(directory, base_name + " map")

    candidates = [base_output + ".html"] + [
        f"{base_output} ({i}).html" for i in range(1, MAX_ATTEMPTS + 1)
    ]
    for candidate in candidates:
        if _reserve(candidate):
            return candidate

    logger.error(
        f"Could not find an available filename after {MAX_ATTEMPTS} attempts. "
        f"Please clean up your output directory or specify --output explicitly."
    )
    raise RuntimeError(f"No available filename found after {MAX_ATTEMPTS} attempts")
