"""
MJML Email Templates
Settlement notifications rendered with MJML for cross-client compatibility
"""

from typing import Optional

from .config import FRONTEND_URL

BRAND_NAME = "CleanBook"

THEME = {
    "primary": "#14b8a6",
    "background": "#f1f5f9",
    "surface": "#ffffff",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "notice": "#92400e",
}

STAGE_LABELS = {
    "SIGNAL": "Signal (50%)",
    "FINAL": "Final payment (50%)",
}


def format_brl(amount: float) -> str:
    return f"R$ {amount:,.2f}"


def details_table(rows: list[tuple[str, str]]) -> str:
    """Two-column label/value table"""
    cells = "".join(
        f"""
        <tr style="border-bottom:1px solid {THEME['border']};">
          <td style="padding:8px 0;color:{THEME['text_muted']};">{label}</td>
          <td style="padding:8px 0;text-align:right;font-weight:600;">{value}</td>
        </tr>"""
        for label, value in rows
    )
    return f"""
    <mj-table color="{THEME['text_primary']}" font-size="14px" padding="8px 0 16px 0">
      {cells}
    </mj-table>
    """


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Wrap content sections in the CleanBook layout"""

    cta = ""
    if cta_url and cta_label:
        cta = f"""
            <mj-button href="{cta_url}" background-color="{THEME['primary']}" color="#ffffff"
              font-weight="600" border-radius="6px" padding="24px 0 0 0" inner-padding="14px 32px">
              {cta_label}
            </mj-button>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="15px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="{THEME['primary']}" padding="20px 32px">
          <mj-column>
            <mj-text font-size="20px" font-weight="700" color="#ffffff" padding="0">
              {BRAND_NAME}
            </mj-text>
          </mj-column>
        </mj-section>

        <mj-section background-color="{THEME['surface']}" padding="32px">
          <mj-column>
            <mj-text font-size="22px" font-weight="600" color="{THEME['text_primary']}" padding="0 0 12px 0">
              {title}
            </mj-text>
            {content_sections}
            {cta}
          </mj-column>
        </mj-section>

        <mj-section padding="24px 16px">
          <mj-column>
            <mj-text align="center" font-size="12px" color="{THEME['text_muted']}" padding="0">
              Sent to the {BRAND_NAME} payment review team.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def payment_proof_review_template(
    service_id: str,
    client_name: str,
    service_type: str,
    stage: str,
    amount: float,
) -> str:
    """Ask a reviewer to validate a client-submitted proof of payment"""
    stage_label = STAGE_LABELS.get(stage, stage)
    details = details_table(
        [
            ("Stage", stage_label),
            ("Amount", format_brl(amount)),
            ("Service", service_type),
            ("Reference", service_id),
        ]
    )

    content = f"""
    <mj-text padding="0 0 8px 0">
      {client_name} submitted a proof of payment for the {stage_label.lower()} stage.
    </mj-text>
    {details}
    <mj-text color="{THEME['notice']}" font-size="13px" padding="0">
      The payment status only changes once the proof is confirmed.
    </mj-text>
    """

    return get_base_template(
        title="Payment proof awaiting review",
        preview_text=f"{client_name} sent a {stage_label} proof",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/admin/payments/{service_id}",
        cta_label="Review payment",
    )


__all__ = [
    "details_table",
    "get_base_template",
    "payment_proof_review_template",
]
