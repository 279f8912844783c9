"""Helper functions for the application."""
import io
from datetime import datetime
from typing import Any

import pandas as pd
from flask import jsonify


def handle_error(error, status_code: int):
    """Handle application errors with consistent format."""
    message = getattr(error, 'description', None) or str(error)
    return jsonify({
        'error': True,
        'message': message,
        'status_code': status_code
    }), status_code


def success_response(data: Any = None, message: str = "Success"):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }
    if data is not None:
        response['data'] = data
    return jsonify(response)


def error_response(message: str, status_code: int = 400):
    """Return consistent error response."""
    return jsonify({
        'error': True,
        'message': message,
        'status_code': status_code
    }), status_code


def dataframe_response(df: pd.DataFrame, basename: str, format_type: str = 'csv',
                       sheet_name: str = 'Sheet1'):
    """Serialize a DataFrame as a CSV or Excel download."""
    stamp = datetime.now().strftime("%Y%m%d")

    if (format_type or 'csv').lower() == 'excel':
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
        output.seek(0)

        return output.getvalue(), 200, {
            'Content-Type': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            'Content-Disposition': f'attachment; filename={basename}_{stamp}.xlsx'
        }

    output = io.StringIO()
    df.to_csv(output, index=False)
    output.seek(0)

    return output.getvalue(), 200, {
        'Content-Type': 'text/csv; charset=utf-8',
        'Content-Disposition': f'attachment; filename={basename}_{stamp}.csv'
    }
