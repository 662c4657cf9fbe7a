import subprocess
from dataclasses import dataclass


@dataclass
class ProcessResult:
    status: int
    output: str
    error: str


def run_process(path, args=()):
    """Run `path` with `args` to completion and capture both output streams."""
    try:
        ret = subprocess.run([path, *args], capture_output=True)
    except OSError as exc:
        return ProcessResult(1, "", str(exc))

    return ProcessResult(
        ret.returncode,
        ret.stdout.decode("utf-8", errors="replace"),
        ret.stderr.decode("utf-8", errors="replace"),
    )
