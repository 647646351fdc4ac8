"""CSV rendering for report exports (semicolon separated, Excel friendly)"""

import csv
from io import StringIO
from typing import Any, Iterable, Sequence

from fastapi.responses import StreamingResponse

UTF8_BOM = "\ufeff"


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return 1 if value else 0
    return value


def to_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """
    Render rows as `;`-delimited CSV with CRLF line endings.

    Values containing the delimiter, a double quote or a line break are quoted,
    with embedded quotes doubled. None renders as an empty cell and booleans as 1/0.
    """
    output = StringIO()
    writer = csv.writer(output, delimiter=";", quotechar='"', lineterminator="\r\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_cell(value) for value in row])
    # No trailing line break after the last row
    return output.getvalue()[: -len("\r\n")]


def csv_response(content: str, filename: str, with_bom: bool = False) -> StreamingResponse:
    if with_bom:
        content = UTF8_BOM + content
    return StreamingResponse(
        iter([content.encode("utf-8")]),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "no-cache",
        },
    )
