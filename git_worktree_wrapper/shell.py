"""Shell integration: the cd marker line and the ``autocd`` function."""

from __future__ import annotations

from pathlib import Path

# External shell functions grep for this prefix; keep it stable.
CD_PREFIX = "GWW_CD:"


def cd_line(path: Path) -> str:
    return f"{CD_PREFIX}{path}"


def autocd_script() -> str:
    return f"""gww() {{
    local output
    output=$(command gww "$@")
    local exit_code=$?
    echo "$output"
    if [ $exit_code -eq 0 ]; then
        local cd_path
        cd_path=$(echo "$output" | grep "^{CD_PREFIX}" | cut -d: -f2-)
        [ -n "$cd_path" ] && cd "$cd_path"
    fi
    return $exit_code
}}

_gww_cd() {{
    local output
    output=$(command gww checkout "$@")
    local exit_code=$?
    if [ $exit_code -ne 0 ]; then
        echo "$output"
        return $exit_code
    fi
    local cd_path
    cd_path=$(echo "$output" | grep "^{CD_PREFIX}" | cut -d: -f2-)
    [ -n "$cd_path" ] && cd "$cd_path"
}}
"""


__all__ = ["CD_PREFIX", "cd_line", "autocd_script"]
