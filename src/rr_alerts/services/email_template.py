"""Subject and HTML body of zone-crossing alert emails."""
from html import escape

from rr_alerts.scoring.crossing import Crossing


def alert_subject(symbol: str, crossing: Crossing, to_label: str) -> str:
    return f"R/R alert: {symbol} moved {crossing.price_direction} in price into {to_label}"


def prepare_alert_body(
    symbol: str,
    crossing: Crossing,
    from_label: str,
    to_label: str,
    boundary_price: float | None,
    price: float,
    as_of_date: str,
    unsubscribe_url: str,
    cooldown_days: int,
) -> str:
    crossed_html = ""
    if crossing.boundary_score is not None and boundary_price is not None:
        crossed_html = (
            '<p style="margin:0 0 6px 0"><strong>Crossed:</strong> '
            f"{crossing.boundary_score:g}-line near ~${boundary_price:,.2f}</p>"
        )
    if len(crossing.boundaries) > 1:
        lines = ", ".join(f"{b:g}" for b in crossing.boundaries)
        crossed_html += (
            '<p style="margin:0 0 6px 0;color:#666">'
            f"Lines crossed since the last check: {lines}</p>"
        )

    return f"""<div style="font-family:system-ui,Segoe UI,Arial,sans-serif">
  <h2 style="margin:0 0 8px 0">{escape(symbol)} moved {crossing.price_direction} in price</h2>
  <p style="margin:0 0 6px 0"><strong>From:</strong> {escape(from_label)}</p>
  <p style="margin:0 0 6px 0"><strong>To:</strong> {escape(to_label)}</p>
  {crossed_html}
  <p style="margin:0 0 6px 0"><strong>Latest close:</strong> ${price:,.2f} <span style="color:#666">(as of {escape(as_of_date)})</span></p>
  <hr style="border:none;border-top:1px solid #ddd;margin:12px 0" />
  <p style="font-size:12px;color:#666;margin:0">Max one alert per ticker per {cooldown_days} days. Not investment advice.</p>
  <p style="font-size:12px;color:#666;margin:6px 0 0 0"><a href="{escape(unsubscribe_url)}">Unsubscribe</a></p>
</div>
"""


def prepare_test_body() -> str:
    return "<p>This is a test email from your R/R alerts deployment.</p>"
