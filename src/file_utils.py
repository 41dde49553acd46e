"""Functions shared between files to read the assets with retries."""

import json

from pathlib import Path
from json import JSONDecodeError
from io import BytesIO
from errno import *
from typing import BinaryIO, Self, Final, Any

import pygame as pg
import numpy as np
from numpy import uint8
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from src.consts import FILE_ATTEMPT_START_I, FILE_ATTEMPT_STOP_I


OS_ERROR_TRANSIENT_CODES: Final[tuple[int, ...]] = (EINTR, EIO, EBUSY, ENFILE, EMFILE, EDEADLK)


class FileError(Exception):
    """Exception raised when a general file operation fails, like reading."""

    __slots__ = (
        "error_str",
    )

    def __init__(self: Self, error_str: str) -> None:
        """
        Initializes the exception.

        Args:
            error string
        """

        super().__init__(error_str)
        self.error_str: str = error_str


def handle_file_os_error(e: OSError) -> tuple[str, bool]:
    """
    Handles an OSError from a file operation, deciding if it should be retried or not.

    Args:
        error
    Returns:
        message, retry flag
    """

    error_str: str = e.strerror + "." if e.strerror is not None else ""
    if e.errno == EINVAL:
        error_str = "Reserved path."

    return error_str, e.errno in OS_ERROR_TRANSIENT_CODES


def try_read_file(f: BinaryIO) -> bytes:
    """
    Reads a file with retries.

    Args:
        file
    Returns:
        content
    Raises:
        FileError: on failure
    """

    attempt_i: int
    error_str: str
    should_retry: bool

    content: bytes = b""
    for attempt_i in range(FILE_ATTEMPT_START_I, FILE_ATTEMPT_STOP_I + 1):
        try:
            content = f.read()
            break
        except OSError as e:
            error_str, should_retry = handle_file_os_error(e)
            if should_retry and attempt_i != FILE_ATTEMPT_STOP_I:
                pg.time.wait(2 ** attempt_i)
                continue

            raise FileError(error_str) from e

    return content


def _try_get_file_bytes(file_path: Path) -> tuple[bytes | None, str | None]:
    """
    Opens and reads a whole file with retries.

    Args:
        path
    Returns:
        content (can be None), error string (can be None)
    """

    attempt_i: int
    should_retry: bool

    content: bytes | None = None
    error_str: str | None = None
    for attempt_i in range(FILE_ATTEMPT_START_I, FILE_ATTEMPT_STOP_I + 1):
        try:
            with file_path.open("rb") as f:
                content = try_read_file(f)
            break
        except (FileNotFoundError, PermissionError, IsADirectoryError, FileError) as e:
            error_str = {
                FileNotFoundError: "File missing.",
                PermissionError: "Permission denied.",
                IsADirectoryError: "Is a directory.",
                FileError: e.error_str if isinstance(e, FileError) else "",
            }[type(e)]
            break
        except OSError as e:
            error_str, should_retry = handle_file_os_error(e)
            if should_retry and attempt_i != FILE_ATTEMPT_STOP_I:
                pg.time.wait(2 ** attempt_i)
                continue

            break

    return content, error_str


def try_load_json(file_path: Path) -> tuple[Any, str | None]:
    """
    Loads a json file with retries.

    Args:
        path
    Returns:
        data (None on failure), error string (can be None)
    """

    content: bytes | None
    error_str: str | None

    content, error_str = _try_get_file_bytes(file_path)
    if content is None:
        return None, error_str

    try:
        return json.loads(content), None
    except (JSONDecodeError, UnicodeDecodeError):
        return None, "Invalid json."


def try_load_artwork(file_path: Path) -> tuple[NDArray[uint8] | None, str | None]:
    """
    Loads the line art as rgba pixels indexed [x, y] like pygame surfaces.

    Args:
        path
    Returns:
        pixels (None on failure), error string (can be None)
    """

    content: bytes | None
    error_str: str | None

    content, error_str = _try_get_file_bytes(file_path)
    if content is None:
        return None, error_str

    try:
        with Image.open(BytesIO(content)) as img:
            rgba_img: Image.Image = img.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        return None, str(e) or "Invalid image."

    # Pillow arrays are [y, x]
    return np.asarray(rgba_img, uint8).transpose((1, 0, 2)).copy(), None
