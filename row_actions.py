import json
import logging
import subprocess

from row_filter import cell_text
from table_columns import RowAction

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    pass


def details_lines(row) -> list[str]:
    if not row:
        return ["(empty row)"]
    width = max(len(str(key)) for key in row.keys())
    lines = []
    for key, value in row.items():
        text = cell_text(value) or "-"
        pieces = text.split("\n")
        lines.append(f"{str(key).ljust(width)} : {pieces[0]}")
        for extra in pieces[1:]:
            lines.append(f"{' ' * width}   {extra}")
    return lines


def row_to_json(row) -> str:
    return json.dumps(row, default=str, ensure_ascii=False)


def copy_to_clipboard(text: str, command) -> None:
    if not command:
        raise ClipboardError("No clipboard command configured")
    try:
        subprocess.run(command, input=text, text=True, check=True)
    except FileNotFoundError as exc:
        raise ClipboardError(f"Clipboard command not found: {command[0]}") from exc
    except subprocess.CalledProcessError as exc:
        raise ClipboardError(f"Clipboard command failed ({exc.returncode})") from exc


def build_default_actions(open_details, copy_row) -> list[RowAction]:
    return [
        RowAction(icon="view", label="View details", on_press=open_details, key="v"),
        RowAction(
            icon="copy", label="Copy row as JSON", on_press=copy_row, color="cyan", key="y"
        ),
    ]
