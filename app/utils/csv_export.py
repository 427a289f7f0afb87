"""
CSV export utilities
"""
import csv
import io
from typing import Any, Dict, Iterable, List

from fastapi.responses import StreamingResponse


def _cell(value: Any) -> str:
    """None becomes an empty cell; everything else its str()"""
    return "" if value is None else str(value)


def stream_csv(headers: List[str], rows: Iterable[Dict], filename: str = "export.csv") -> StreamingResponse:
    """
    Stream CSV data as HTTP response

    Args:
        headers: Column headers, also the keys read from each row
        rows: Iterable of dictionaries with data rows
        filename: Filename for Content-Disposition header

    Returns:
        StreamingResponse with CSV content
    """
    def generate():
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=headers, quoting=csv.QUOTE_MINIMAL, extrasaction="ignore")

        writer.writeheader()
        yield _drain(buffer)

        for row in rows:
            writer.writerow({header: _cell(row.get(header)) for header in headers})
            yield _drain(buffer)

    return StreamingResponse(
        generate(),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )


def _drain(buffer: io.StringIO) -> str:
    content = buffer.getvalue()
    buffer.seek(0)
    buffer.truncate(0)
    return content
