# DEPENDENCIES
import math
from io import BytesIO
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from reportlab.lib import colors
from reportlab.platypus import Table
from reportlab.lib.units import inch
from reportlab.platypus import Spacer
from reportlab.lib.enums import TA_LEFT
from reportlab.platypus import Paragraph
from reportlab.platypus import TableStyle
from reportlab.lib.enums import TA_CENTER
from reportlab.graphics.shapes import Path
from reportlab.lib.enums import TA_JUSTIFY
from reportlab.lib.pagesizes import letter
from xml.sax.saxutils import escape
from reportlab.graphics.shapes import Circle
from reportlab.graphics.shapes import String
from reportlab.graphics.shapes import Drawing
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import SimpleDocTemplate
from reportlab.platypus.flowables import KeepInFrame
from reportlab.lib.styles import getSampleStyleSheet


RISK_COLORS = {"high"   : colors.HexColor('#dc2626'),
               "medium" : colors.HexColor('#ca8a04'),
               "low"    : colors.HexColor('#16a34a'),
              }


class PDFReportGenerator:
    """
    One-document PDF report of a clause-risk analysis export
    """
    def __init__(self):
        self.styles        = getSampleStyleSheet()

        self._setup_custom_styles()

        self.page_width    = letter[0]
        self.page_height   = letter[1]
        self.margin_left   = 0.75 * inch
        self.margin_right  = 0.75 * inch
        self.margin_top    = 1.0 * inch
        self.margin_bottom = 1.0 * inch
        self.content_width = self.page_width - self.margin_left - self.margin_right


    def _setup_custom_styles(self):
        self.styles.add(ParagraphStyle(name       = 'ReportTitle',
                                       parent     = self.styles['Heading1'],
                                       fontSize   = 20,
                                       textColor  = colors.HexColor('#1a1a1a'),
                                       spaceAfter = 15,
                                       alignment  = TA_CENTER,
                                       fontName   = 'Helvetica-Bold',
                                      )
                       )

        self.styles.add(ParagraphStyle(name        = 'SectionHeading',
                                       parent      = self.styles['Heading2'],
                                       fontSize    = 14,
                                       textColor   = colors.HexColor('#1a1a1a'),
                                       spaceAfter  = 10,
                                       spaceBefore = 15,
                                       fontName    = 'Helvetica-Bold',
                                      )
                       )

        self.styles.add(ParagraphStyle(name      = 'CustomBodyText',
                                       parent    = self.styles['Normal'],
                                       fontSize  = 9,
                                       leading   = 12,
                                       textColor = colors.HexColor('#333333'),
                                       alignment = TA_JUSTIFY,
                                       fontName  = 'Helvetica',
                                      )
                       )

        self.styles.add(ParagraphStyle(name      = 'TableHeader',
                                       parent    = self.styles['Normal'],
                                       fontSize  = 8,
                                       leading   = 10,
                                       textColor = colors.white,
                                       fontName  = 'Helvetica-Bold',
                                       alignment = TA_CENTER,
                                      )
                       )

        self.styles.add(ParagraphStyle(name      = 'TableCell',
                                       parent    = self.styles['Normal'],
                                       fontSize  = 8,
                                       leading   = 10,
                                       textColor = colors.HexColor('#333333'),
                                       fontName  = 'Helvetica',
                                       alignment = TA_LEFT,
                                      )
                       )


    def _draw_risk_score_circle(self, score: int, risk_level: str) -> Drawing:
        """
        Ring filled in proportion to the score, colored by risk level
        """
        d                  = Drawing(140, 140)

        center_x, center_y = 70, 70
        outer_radius       = 55
        inner_radius       = 40
        color              = self._get_risk_color(risk_level)

        bg_circle             = Circle(center_x, center_y, outer_radius)
        bg_circle.fillColor   = colors.HexColor('#f0f0f0')
        bg_circle.strokeColor = None
        d.add(bg_circle)

        sweep_angle = (max(0, min(100, score)) / 100.0) * 360
        start_angle = 90

        if (sweep_angle > 0):
            num_segments = max(10, int(sweep_angle / 5))
            angle_step   = sweep_angle / num_segments
            p            = Path()

            start_rad    = math.radians(start_angle)
            p.moveTo(center_x + outer_radius * math.cos(start_rad), center_y + outer_radius * math.sin(start_rad))

            for i in range(1, num_segments + 1):
                angle = math.radians(start_angle - (i * angle_step))
                p.lineTo(center_x + outer_radius * math.cos(angle), center_y + outer_radius * math.sin(angle))

            for i in range(num_segments, -1, -1):
                angle = math.radians(start_angle - (i * angle_step))
                p.lineTo(center_x + inner_radius * math.cos(angle), center_y + inner_radius * math.sin(angle))

            p.closePath()
            p.fillColor   = color
            p.strokeColor = None
            d.add(p)

        inner_circle             = Circle(center_x, center_y, inner_radius - 2)
        inner_circle.fillColor   = colors.white
        inner_circle.strokeColor = None
        d.add(inner_circle)

        score_text               = String(center_x, center_y - 12, str(score), textAnchor = 'middle')
        score_text.fontSize      = 36
        score_text.fontName      = 'Helvetica-Bold'
        score_text.fillColor     = color
        d.add(score_text)

        subtitle_text            = String(center_x, center_y - 30, "/100", textAnchor = 'middle')
        subtitle_text.fontSize   = 16
        subtitle_text.fontName   = 'Helvetica'
        subtitle_text.fillColor  = colors.HexColor('#666666')
        d.add(subtitle_text)

        return d


    def _get_risk_color(self, risk_level: str) -> colors.Color:
        return RISK_COLORS.get(str(risk_level).lower(), RISK_COLORS["low"])


    def _create_header_footer(self, canvas, doc):
        canvas.saveState()

        canvas.setFont('Helvetica-Bold', 7)
        canvas.setFillColor(colors.black)
        canvas.drawString(self.margin_left, self.page_height - 0.7 * inch, "ContraScope Contract Review Report")

        canvas.setFont('Helvetica', 7)
        canvas.setFillColor(colors.HexColor('#666666'))
        canvas.drawString(self.page_width - self.margin_right - 0.8 * inch, 0.6 * inch, f"Page {doc.page}")
        canvas.drawCentredString(self.page_width / 2.0, 0.6 * inch, "Heuristic rule scan. Not legal advice.")

        canvas.restoreState()


    def generate_report(self, export: Dict[str, Any], output_path: Optional[str] = None) -> BytesIO:
        """
        Generate PDF report

        Arguments:
        ----------
            export      { dict } : Analysis export document (see reporter.json_exporter.export_analysis)

            output_path { str }  : Write to this path instead of the returned buffer

        Returns:
        --------
            { BytesIO }          : Buffer positioned at 0 (empty when output_path is given)
        """
        buffer = BytesIO()

        doc    = SimpleDocTemplate(output_path or buffer,
                                   pagesize     = letter,
                                   rightMargin  = self.margin_right,
                                   leftMargin   = self.margin_left,
                                   topMargin    = self.margin_top,
                                   bottomMargin = self.margin_bottom,
                                  )

        story  = list()
        story.extend(self._build_overview(export))
        story.extend(self._build_clause_issues_table(export))
        story.extend(self._build_negotiation_points_table(export))

        doc.build(story, onFirstPage = self._create_header_footer, onLaterPages = self._create_header_footer)

        buffer.seek(0)

        return buffer


    def _build_overview(self, export: Dict) -> List:
        elements    = list()

        elements.append(Paragraph("Contract Risk Review", self.styles['ReportTitle']))

        file_name   = escape(str(export.get('fileName') or "Pasted text"))
        analyzed_at = escape(str(export.get('analyzedAt') or "-"))
        info_text   = f"<b>Source:</b> {file_name} | <b>Analyzed at:</b> {analyzed_at}"

        if export.get('fileSize') is not None:
            info_text += f" | <b>Size:</b> {int(export['fileSize']):,} bytes"

        elements.append(Paragraph(info_text, self.styles['CustomBodyText']))
        elements.append(Spacer(1, 0.15 * inch))

        score       = int(export.get('globalScore', 0))
        risk_level  = str(export.get('riskLevel', 'low'))

        score_frame = KeepInFrame(1.6 * inch, 1.6 * inch, [self._draw_risk_score_circle(score, risk_level)])
        risk_para   = Paragraph(f"<b>Global Risk Score: {score}/100 ({escape(risk_level.upper())})</b>", self.styles['CustomBodyText'])

        risk_layout = Table([[score_frame, risk_para]], colWidths = [1.7 * inch, 4.0 * inch])
        risk_layout.setStyle(TableStyle([('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
                                         ('LEFTPADDING', (0, 0), (-1, -1), 0),
                                         ('RIGHTPADDING', (0, 0), (-1, -1), 0),
                                        ])
                            )

        elements.append(risk_layout)
        elements.append(Spacer(1, 0.2 * inch))

        elements.append(Paragraph("Summary", self.styles['SectionHeading']))
        elements.append(Paragraph(escape(str(export.get('summary', ''))), self.styles['CustomBodyText']))

        return elements


    def _build_clause_issues_table(self, export: Dict) -> List:
        elements = [Paragraph("Problematic Clauses", self.styles['SectionHeading'])]
        issues   = export.get('clauseIssues') or []

        if not issues:
            elements.append(Paragraph("No clause matched the review rules.", self.styles['CustomBodyText']))
            return elements

        rows     = [[Paragraph(header, self.styles['TableHeader']) for header in ("Clause", "Risk", "Issue", "Suggestion")]]

        for issue in issues:
            rows.append([Paragraph(escape(str(issue.get('clause', ''))), self.styles['TableCell']),
                         Paragraph(escape(str(issue.get('risk', '')).upper()), self.styles['TableCell']),
                         Paragraph(escape(str(issue.get('issue', ''))), self.styles['TableCell']),
                         Paragraph(escape(str(issue.get('suggestion', ''))), self.styles['TableCell']),
                        ])

        table    = Table(rows, colWidths = [1.5 * inch, 0.7 * inch, 2.3 * inch, 2.5 * inch], repeatRows = 1)
        table.setStyle(self._table_style(rows = issues, risk_key = 'risk'))

        elements.append(table)

        return elements


    def _build_negotiation_points_table(self, export: Dict) -> List:
        elements = [Paragraph("Negotiation Points", self.styles['SectionHeading'])]
        points   = export.get('negotiationPoints') or []

        if not points:
            elements.append(Paragraph("Nothing to negotiate on the reviewed rules.", self.styles['CustomBodyText']))
            return elements

        rows     = [[Paragraph(header, self.styles['TableHeader']) for header in ("Point", "Priority", "Proposed Clause")]]

        for point in points:
            rows.append([Paragraph(escape(str(point.get('point', ''))), self.styles['TableCell']),
                         Paragraph(escape(str(point.get('priority', '')).upper()), self.styles['TableCell']),
                         Paragraph(escape(str(point.get('alternative', ''))), self.styles['TableCell']),
                        ])

        table    = Table(rows, colWidths = [1.6 * inch, 0.8 * inch, 4.6 * inch], repeatRows = 1)
        table.setStyle(self._table_style(rows = points, risk_key = 'priority'))

        elements.append(table)

        return elements


    def _table_style(self, rows: List[Dict], risk_key: str) -> TableStyle:
        commands = [('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#374151')),
                    ('VALIGN', (0, 0), (-1, -1), 'TOP'),
                    ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#d1d5db')),
                    ('TOPPADDING', (0, 1), (-1, -1), 4),
                    ('BOTTOMPADDING', (0, 1), (-1, -1), 4),
                   ]

        # Tint the risk column of each body row
        for index, row in enumerate(rows, start = 1):
            commands.append(('TEXTCOLOR', (1, index), (1, index), self._get_risk_color(row.get(risk_key, 'low'))))

        return TableStyle(commands)



def generate_pdf_report(export: Dict[str, Any], output_path: Optional[str] = None) -> BytesIO:
    """
    Convenience function to generate PDF report
    """
    return PDFReportGenerator().generate_report(export = export, output_path = output_path)
