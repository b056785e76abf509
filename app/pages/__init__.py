"""Page renderers for the BudgetTrack dashboard."""

from .dashboard import render_page as render_dashboard_page
from .forecast import render_page as render_forecast_page
from .recurring import render_page as render_recurring_page
from .transactions import render_page as render_transactions_page

__all__ = [
    "render_dashboard_page",
    "render_forecast_page",
    "render_recurring_page",
    "render_transactions_page",
]
