from io import BytesIO
from typing import List

import pandas as pd
from fastapi.responses import StreamingResponse

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def excel_response(rows: List[dict], filename: str, sheet_name: str) -> StreamingResponse:
    """Write rows to an in-memory workbook and stream it back as an attachment."""
    df = pd.DataFrame(rows)

    excel_file = BytesIO()
    df.to_excel(excel_file, index=False, sheet_name=sheet_name)
    excel_file.seek(0)

    headers = {
        'Content-Disposition': f'attachment; filename="{filename}"'
    }
    return StreamingResponse(excel_file, media_type=XLSX_MEDIA_TYPE, headers=headers)
