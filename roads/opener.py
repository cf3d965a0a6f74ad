"""Open a saved file with the desktop's default application."""

import os
import platform
import subprocess

from loguru import logger

from roads.errors import OpenerError


def open_command(path: str, system: str = None) -> list:
    system = system or platform.system()
    if system == "Darwin":
        return ["open", path]
    if system == "Windows":
        return ["cmd", "/c", "start", "", path]
    return ["xdg-open", path]


def open_path(path: str) -> None:
    cmd = open_command(os.path.abspath(path))
    logger.info(f"Opening {path} with {cmd[0]}")
    try:
        subprocess.run(
            cmd,
            check=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise OpenerError(f"No opener available ({cmd[0]} not found)") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode(errors="replace").strip()
        raise OpenerError(f"{cmd[0]} failed on {path}: {stderr or e}") from e
    except OSError as e:
        raise OpenerError(f"Cannot open {path}: {e}") from e
