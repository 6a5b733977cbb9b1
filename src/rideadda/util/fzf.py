# rideadda/util/fzf.py
"""
Helper functions for track selection using `fzf`
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from shutil import which

from rideadda.errors import FzfNotFoundError, SelectionError


def fzf_select_paths(
        paths: list[Path], *,
        header: str,
        multi: bool = True,
        preview: str | None = None,
) -> list[Path]:
    """
    Let the user pick from `paths` with fzf; matching is on the file name only.

    Returns an empty list when the user aborts (Esc / Ctrl-C).
    """
    if not which("fzf"):
        raise FzfNotFoundError("fzf not found on PATH. Install fzf or pass GPX files explicitly.")

    lines = [f"{p.name}\t{p}" for p in paths]
    input_text = "\n".join(lines) + "\n"

    cmd = [
        "fzf",
        "--ansi",
        "--delimiter=\t",
        "--nth=1",
        "--with-nth=1",
        "--height=60%",
        "--layout=reverse",
        "--border",
        "--header", header,
    ]

    if multi:
        cmd.append("--multi")

    if preview:
        cmd.extend(["--preview", preview])
        cmd.extend(["--preview-window", "right:60%:wrap"])

    proc = subprocess.run(
        cmd,
        input=input_text.encode(),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    # 1 = no match, 130 = interrupted
    if proc.returncode not in (0, 1, 130):
        raise SelectionError(proc.stderr.decode(errors="replace"))

    selected: list[Path] = []
    for line in proc.stdout.decode().splitlines():
        line = line.strip()
        if not line:
            continue
        # line is: "name<TAB>fullpath"
        path_str = line.split("\t", 1)[1] if "\t" in line else line
        selected.append(Path(path_str).expanduser().resolve())
    return selected
