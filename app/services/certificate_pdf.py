from datetime import date, datetime
from io import BytesIO
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas
from app.domain.certificates.models import Certificate


_MM = 72 / 25.4

TOP_MARGIN = 20
LEFT_MARGIN = 15
RIGHT_MARGIN = 15
BOTTOM_MARGIN = 20
FOOTER_HEIGHT = 25
ROW_HEIGHT = 8
LINE_GAP = 8
OBSERVATION_COLUMNS = (("Sr. No.", 20), ("Concentration of Gas", 70), ("Reading Before", 40), ("Reading After", 40))

CONCLUSION = (
    "The above-mentioned Gas Detector was calibrated successfully, and the result confirms that "
    "the performance of the instrument is within acceptable limits."
)


def _mm(v: float) -> float:
    return v * _MM


def _fmt_date(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else "N/A"


def render_certificate_pdf(certificate: Certificate, *, generated_at: datetime | None = None) -> bytes:
    """Render one calibration certificate to PDF bytes.

    Coordinates are in millimetres measured from the top of an A4 page.
    Content that would run into the footer continues on a new page; the
    observations table repeats its header there.
    """
    generated_at = generated_at or datetime.now()
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(f"Calibration Certificate {certificate.certificate_no}")
    width, height = A4
    page_h_mm = height / _MM
    page_w_mm = width / _MM
    footer_y = page_h_mm - BOTTOM_MARGIN
    content_limit = footer_y - FOOTER_HEIGHT
    right_x = _mm(page_w_mm - RIGHT_MARGIN)
    page_no = 1

    def y_pt(y_mm: float) -> float:
        return height - _mm(y_mm)

    def footer() -> None:
        c.setStrokeGray(0.7)
        c.setLineWidth(0.3)
        c.line(_mm(LEFT_MARGIN), y_pt(footer_y - 10), right_x, y_pt(footer_y - 10))
        c.setFont("Times-Roman", 8)
        c.setFillGray(0.4)
        c.drawString(
            _mm(LEFT_MARGIN), y_pt(footer_y - 5),
            "This certificate is electronically generated and does not require a physical signature."
        )
        c.drawString(_mm(LEFT_MARGIN), y_pt(footer_y), f"Generated on: {generated_at:%d/%m/%Y %H:%M}")
        c.drawRightString(right_x, y_pt(footer_y), f"Page {page_no}")

    def ensure_space(needed: float) -> bool:
        nonlocal y, page_no
        if y + needed <= content_limit:
            return False
        footer()
        c.showPage()
        page_no += 1
        y = TOP_MARGIN
        return True

    y = 30.0
    c.setFont("Times-Bold", 16)
    c.setFillColorRGB(0, 51 / 255, 102 / 255)
    c.drawCentredString(width / 2, y_pt(y), "CALIBRATION CERTIFICATE")
    y += 12

    label_x = LEFT_MARGIN
    value_x = label_x + 57

    def row(label: str, value: str | None) -> None:
        nonlocal y
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Times-Bold", 11)
        c.drawString(_mm(label_x), y_pt(y), label)
        c.setFillGray(0.2)
        c.setFont("Times-Roman", 11)
        c.drawString(_mm(value_x), y_pt(y), ": " + (value or "N/A"))
        y += LINE_GAP

    row("Certificate No.", certificate.certificate_no)
    row("Customer Name", certificate.customer_name)
    row("Site Location", certificate.site_location)
    row("Make & Model", certificate.make_model)
    row("Range", certificate.range)
    row("Serial No.", certificate.serial_no)
    row("Calibration Gas", certificate.calibration_gas)
    row("Gas Canister Details", certificate.gas_canister_details)
    y += 5
    row("Date of Calibration", _fmt_date(certificate.date_of_calibration))
    row("Calibration Due Date", _fmt_date(certificate.calibration_due_date))
    row("Status", certificate.status)

    y += 5
    c.setStrokeGray(0.7)
    c.setLineWidth(0.3)
    c.line(_mm(LEFT_MARGIN), y_pt(y), _mm(page_w_mm - RIGHT_MARGIN), y_pt(y))
    y += 10

    def table_header() -> None:
        nonlocal y
        c.setFillColorRGB(0, 0, 0)
        c.setStrokeGray(0)
        c.setLineWidth(1)
        c.setFont("Times-Bold", 10)
        x = LEFT_MARGIN
        for header, col_w in OBSERVATION_COLUMNS:
            c.rect(_mm(x), y_pt(y + 3), _mm(col_w), _mm(ROW_HEIGHT))
            c.drawString(_mm(x + 2), y_pt(y), header)
            x += col_w
        y += ROW_HEIGHT

    # title, header and the first row stay together
    ensure_space(10 + 2 * ROW_HEIGHT)
    c.setFont("Times-Bold", 12)
    c.setFillColorRGB(0, 51 / 255, 102 / 255)
    c.drawString(_mm(LEFT_MARGIN), y_pt(y), "OBSERVATIONS")
    y += 10
    table_header()

    for index, obs in enumerate(certificate.observations or [], start=1):
        if ensure_space(ROW_HEIGHT):
            table_header()
        cells = (str(index), obs.get("gas") or "", obs.get("before") or "", obs.get("after") or "")
        c.setFillColorRGB(0, 0, 0)
        c.setStrokeGray(0)
        c.setFont("Times-Roman", 10)
        x = LEFT_MARGIN
        for text, (_, col_w) in zip(cells, OBSERVATION_COLUMNS):
            c.rect(_mm(x), y_pt(y + 2), _mm(col_w), _mm(ROW_HEIGHT))
            c.drawString(_mm(x + 2), y_pt(y), text)
            x += col_w
        y += ROW_HEIGHT
    y += 15

    content_w = _mm(page_w_mm - LEFT_MARGIN - RIGHT_MARGIN)
    for line in simpleSplit(CONCLUSION, "Times-Roman", 10, content_w):
        ensure_space(6)
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Times-Roman", 10)
        c.drawString(_mm(LEFT_MARGIN), y_pt(y), line)
        y += 6
    y += 15

    ensure_space(10)
    c.setFillColorRGB(0, 0, 0)
    c.setFont("Times-Bold", 10)
    c.drawRightString(right_x, y_pt(y), "Tested & Calibrated By")
    c.setFont("Times-Roman", 10)
    c.drawRightString(right_x, y_pt(y + 10), certificate.engineer_name or "________________")

    footer()
    c.showPage()
    c.save()
    return buffer.getvalue()


def certificate_pdf_filename(certificate: Certificate) -> str:
    return "certificate_" + certificate.certificate_no.replace("/", "-") + ".pdf"
