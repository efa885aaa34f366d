# herald/shell.py
import os
import subprocess
from typing import Optional, Sequence

from herald.errors import CommandError


def session_environment(**defaults: str) -> dict[str, str]:
    """
    Copy of the process environment with `defaults` filled in for any
    variable that is missing or empty.
    """
    env = dict(os.environ)
    for key, value in defaults.items():
        if not env.get(key):
            env[key] = value
    return env


def run_command(args: Sequence[str], env: Optional[dict] = None,
                timeout: Optional[float] = None) -> subprocess.CompletedProcess:
    """
    Run an external program (no shell) and wait for it to exit.
    Raises CommandError if the program is missing, cannot be spawned,
    exits non-zero or runs past `timeout` seconds.
    """
    args = [str(a) for a in args]
    prog = args[0]
    try:
        proc = subprocess.run(
            args,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        raise CommandError(f"{prog}: command not found")
    except subprocess.TimeoutExpired:
        raise CommandError(f"{prog} timed out after {timeout:g}s")
    except OSError as e:
        raise CommandError(f"{prog}: {e}")

    if proc.returncode != 0:
        stderr = (proc.stderr or b"").decode("utf-8", errors="replace").strip()
        msg = f"{prog} exited with status {proc.returncode}"
        if stderr:
            msg += f": {stderr}"
        raise CommandError(msg, returncode=proc.returncode)
    return proc


def spawn_detached(args: Sequence[str], env: Optional[dict] = None) -> subprocess.Popen:
    """Start a program without waiting for it (GUI apps)."""
    args = [str(a) for a in args]
    try:
        return subprocess.Popen(
            args,
            env=env,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        raise CommandError(f"{args[0]}: {e}")
