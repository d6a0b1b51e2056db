import enum
import os
import stat
import tempfile
from pathlib import Path
from typing import Callable

from callsy.exceptions import OutputIOError, OverwriteDeclined

# Reads one answer line, given the prompt to show.
LineSource = Callable[[str], str]


class Decision(enum.Enum):
    overwrite = "overwrite"
    decline = "decline"
    retry = "retry"


def confirm(line: str | None) -> Decision:
    """Interpret one answer to the overwrite prompt; `None` means the read failed."""
    if line is None:
        return Decision.retry
    answer = line.rstrip().lower()
    if answer in ("y", "yes"):
        return Decision.overwrite
    if answer in ("n", "no"):
        return Decision.decline
    return Decision.retry


def stdin_line_source(prompt: str) -> str:
    return input(prompt)


def check_output_path(path: str | os.PathLike, read_line: LineSource = stdin_line_source) -> None:
    """Ask before an existing file gets replaced; raise `OverwriteDeclined` on "no"."""
    if not os.path.exists(path):
        return
    prompt = f"Output file {str(path)!r} already exists, would you like to overwrite [Y/N]: "
    while True:
        try:
            line = read_line(prompt)
        except EOFError:
            # nothing more will ever be typed
            raise OverwriteDeclined(path, "no answer on standard input") from None
        except OSError:
            print("Failed to read line.")
            line = None
        decision = confirm(line)
        if decision is Decision.overwrite:
            return
        if decision is Decision.decline:
            raise OverwriteDeclined(path)


def _target_mode(path: Path) -> int:
    """Mode the written file should end up with: the existing one, else the umask default."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _stage(path: Path, content: str) -> Path:
    """Write content to a temporary file next to `path`."""
    mode = _target_mode(path)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        # mkstemp creates the file owner-only
        os.chmod(tmp, mode)
    except BaseException:
        os.unlink(tmp)
        raise
    return Path(tmp)


def write_outputs(artifacts: dict[str | os.PathLike, str]) -> None:
    """Write each artifact to its path.

    Every content is staged before any of them is moved into place, so a
    failure never leaves a truncated or half-written output behind.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for target, content in artifacts.items():
            path = Path(target)
            try:
                staged.append((_stage(path, content), path))
            except OSError as e:
                raise OutputIOError(target, e) from e
        for tmp, path in staged:
            try:
                os.replace(tmp, path)
            except OSError as e:
                raise OutputIOError(path, e) from e
    finally:
        for tmp, _ in staged:
            if tmp.exists():
                tmp.unlink()
