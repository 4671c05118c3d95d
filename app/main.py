"""ForecastLens explorer: zoomable forecast chart with a scenario preview."""

from __future__ import annotations

from datetime import date, timedelta

import streamlit as st

from analytics.goals import compute_contribution_schedule
from analytics.scenarios import ADJUSTMENT_MAX, ADJUSTMENT_MIN
from analytics.windowing import can_pan, can_zoom_in, can_zoom_out
from config import configure_logging, get_settings
from core.errors import InvalidGoalParameters
from core.forecast_service import prepare_forecast_view
from core.formatting import format_percentage
from core.interaction import InteractionController, bind_controller
from core.models import BaseFinancials, ForecastScenario
from data.synth import generate_forecast_rows, generate_spending_rows
from visualization import build_forecast_chart, build_scenario_chart, build_spending_trends_chart

BASE_FINANCIALS = BaseFinancials(income=5000.0, expenses=3000.0)
HISTORY_DAYS = 120
HORIZON_DAYS = 60


@st.cache_data(show_spinner=False)
def _load_demo_rows(anchor: date) -> tuple[list[dict], list[dict]]:
    """Return cached synthetic forecast and spending rows ending at ``anchor``."""

    start = anchor - timedelta(days=HISTORY_DAYS)
    forecast_rows = generate_forecast_rows(start, HISTORY_DAYS, HORIZON_DAYS)
    spending_rows = generate_spending_rows(start, HISTORY_DAYS)
    return forecast_rows, spending_rows


def _controller(total_length: int) -> InteractionController:
    controller = st.session_state.get("forecast_controller")
    if controller is None:
        controller = bind_controller(total_length, BASE_FINANCIALS)
        st.session_state["forecast_controller"] = controller
    elif controller.total_length != total_length:
        controller.set_series_length(total_length)
    return controller


def _render_window_controls(controller: InteractionController) -> None:
    # on_click handlers run before the rerun, so disabled states below see the new window
    settings = get_settings()
    window = controller.window
    back_enabled = can_pan(
        controller.total_length, window, "back", min_visible=settings.min_visible_points
    )
    forward_enabled = can_pan(
        controller.total_length, window, "forward", min_visible=settings.min_visible_points
    )

    cols = st.columns(6)
    cols[0].button(
        "Zoom in",
        on_click=controller.zoom_in,
        disabled=not can_zoom_in(window, max_zoom=settings.max_zoom),
    )
    cols[1].button("Zoom out", on_click=controller.zoom_out, disabled=not can_zoom_out(window))
    cols[2].button("Reset", on_click=controller.reset)
    cols[3].button("← Earlier", on_click=controller.pan, args=("back",), disabled=not back_enabled)
    cols[4].button("Later →", on_click=controller.pan, args=("forward",), disabled=not forward_enabled)
    cols[5].caption(f"Zoom: {window.zoom_level:.1f}x")


def _render_scenario(controller: InteractionController) -> ForecastScenario:
    st.subheader("Scenario")
    income_pct = st.slider(
        "Income adjustment (%)", int(ADJUSTMENT_MIN), int(ADJUSTMENT_MAX), 0, step=5
    )
    expense_pct = st.slider(
        "Expense adjustment (%)", int(ADJUSTMENT_MIN), int(ADJUSTMENT_MAX), 0, step=5
    )
    scenario = ForecastScenario(
        id="preview",
        name="Preview",
        income_adjustment_pct=float(income_pct),
        expense_adjustment_pct=float(expense_pct),
    )
    # Streamlit reruns once per committed slider value
    controller.edit_scenario(scenario)
    controller.flush()

    st.caption(
        f"Income {format_percentage(scenario.income_adjustment_pct)}, "
        f"expenses {format_percentage(scenario.expense_adjustment_pct)}"
    )
    return scenario


def _render_goal_planner() -> None:
    settings = get_settings()
    st.subheader("Savings goal")
    target_amount = st.number_input("Target amount", min_value=0.0, value=10000.0, step=500.0)
    target_date = st.date_input("Target date", value=date.today() + timedelta(days=365))
    try:
        schedule = compute_contribution_schedule(target_amount, target_date, date.today())
    except InvalidGoalParameters as exc:
        st.info(f"Auto-contribution unavailable: {exc}")
        return

    cols = st.columns(3)
    cols[0].metric("Weekly", f"{settings.currency_symbol}{schedule.weekly_amount:,}")
    cols[1].metric("Monthly", f"{settings.currency_symbol}{schedule.monthly_amount:,}")
    cols[2].metric("Quarterly", f"{settings.currency_symbol}{schedule.quarterly_amount:,}")


def main() -> None:
    """Application entrypoint for the ForecastLens explorer."""

    st.set_page_config(page_title="ForecastLens", page_icon="📈", layout="wide")
    configure_logging()
    settings = get_settings()

    forecast_rows, spending_rows = _load_demo_rows(date.today())
    controller = _controller(len(forecast_rows))

    st.title("Forecast explorer")
    _render_window_controls(controller)

    with st.sidebar:
        scenario = _render_scenario(controller)
        _render_goal_planner()

    view = prepare_forecast_view(
        forecast_rows,
        spending_rows,
        window=controller.window,
        base=BASE_FINANCIALS,
        scenario=scenario,
        settings=settings,
    )

    st.plotly_chart(
        build_forecast_chart(view["visible_points"], settings.currency_symbol, today=date.today()),
        use_container_width=True,
    )

    left, right = st.columns(2)
    with left:
        st.subheader("Spending trends")
        st.plotly_chart(
            build_spending_trends_chart(view["days"], settings.currency_symbol),
            use_container_width=True,
        )
    with right:
        st.subheader("Scenario preview")
        projection = controller.last_projection or view["projection"]
        if projection is not None:
            st.plotly_chart(
                build_scenario_chart(BASE_FINANCIALS, projection, settings.currency_symbol),
                use_container_width=True,
            )

    for message in view["insight_messages"]:
        st.markdown(message, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
