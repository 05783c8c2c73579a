from io import BytesIO
import pandas as pd
import logging

logger = logging.getLogger(__name__)


EXPORT_COLUMNS = [
    'id', 'studentId', 'studentName', 'internshipId', 'internshipTitle',
    'status', 'appliedAt', 'resumeUrl',
]
EXPORT_SHEET = 'Applications'
EXPORT_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
EXPORT_FILENAME = 'applications.xlsx'
UNKNOWN = 'Unknown'


def flatten_application(application):
    """One export row; joins that point at deleted rows read "Unknown"."""
    return {
        'id': application.id,
        'studentId': application.student_id,
        'studentName': getattr(application, 'student_name', None) or UNKNOWN,
        'internshipId': application.internship_id,
        'internshipTitle': getattr(application, 'internship_title', None) or UNKNOWN,
        'status': application.status,
        # Excel cannot store timezone-aware datetimes
        'appliedAt': application.applied_at.strftime('%Y-%m-%d %H:%M:%S') if application.applied_at else '',
        'resumeUrl': application.resume_url,
    }


def build_applications_workbook(applications):
    """Serialize applications into an .xlsx document and return its bytes"""
    rows = [flatten_application(application) for application in applications]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    output = BytesIO()
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET)

        # Auto-adjust columns' width
        worksheet = writer.sheets[EXPORT_SHEET]
        for i, col in enumerate(df.columns):
            longest = df[col].astype(str).map(len).max() if len(df) else 0
            worksheet.set_column(i, i, max(longest, len(col)) + 2)

    logger.info(f"Built applications export with {len(rows)} rows")
    return output.getvalue()
