"""
Streamlit UI for team seat pricing.

Features:
- Seat calculator with live breakdown and explanation
- Plan advisor questionnaire
- Tier price table with margin checks
- Export breakdown to CSV
"""
import streamlit as st
import pandas as pd
from datetime import datetime

from team_pricing.engine import (
    PricingEngine,
    BillingInterval,
    SeatSelection,
    describe_team_pricing,
    format_currency,
)
from team_pricing.config.settings import get_settings
from team_pricing.policy.margin_policy import check_pricing_margins
from team_pricing.services.recommendation_service import Questionnaire, recommend_plan


st.set_page_config(
    page_title="Team Seat Pricing",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return PricingEngine.from_settings(get_settings())


try:
    engine = get_engine()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


def breakdown_frame(breakdown) -> pd.DataFrame:
    return pd.DataFrame([
        {
            'Tier': line.display_name,
            'Seats': line.count,
            'Unit Price': float(line.unit_price),
            'Subtotal': float(line.subtotal),
        }
        for line in breakdown.per_tier.values()
    ])


# ============================================================================
# SIDEBAR: Billing
# ============================================================================
with st.sidebar:
    st.header("Billing")
    interval_label = st.radio("Billing interval", ["Monthly", "Yearly"], horizontal=True)
    billing_interval = BillingInterval.parse(interval_label)
    if billing_interval is BillingInterval.YEARLY:
        st.caption("Yearly prices include one month free.")

    st.divider()
    st.markdown("**Team discounts**")
    st.caption("5-9 seats: 10% · 10-19 seats: 20% · 20+ seats: 25%")


st.title("Team Seat Pricing")
st.caption(f"Pricing Engine Active | {datetime.now().strftime('%Y-%m-%d')}")

tab1, tab2, tab3 = st.tabs(["Seat Calculator", "Plan Advisor", "Tiers"])


# ============================================================================
# TAB 1: SEAT CALCULATOR
# ============================================================================
with tab1:
    col1, col2 = st.columns([1.2, 1.8], gap="large")

    with col1:
        st.subheader("Seats")
        with st.container(border=True):
            seats = []
            for tier, config in engine.tier_table.items():
                price = format_currency(config.unit_price(billing_interval))
                count = st.number_input(
                    f"{config.display_name} ({price}/user)",
                    min_value=0, value=0, step=1, key=f"seats_{tier.value}"
                )
                seats.append(SeatSelection(tier, int(count)))

    breakdown = engine.calculate_team_pricing(seats, billing_interval)

    with col2:
        st.subheader("Summary")
        with st.container(border=True):
            m1, m2, m3 = st.columns(3)
            m1.metric("Seats", breakdown.total_seats)
            m2.metric("Discount", f"{int(breakdown.discount_percent * 100)}%")
            m3.metric("Final Total", format_currency(breakdown.final_total))

            if breakdown.discount_amount > 0:
                st.markdown(f":green[**You Save: {format_currency(breakdown.discount_amount)}**]")

            st.info(describe_team_pricing(breakdown))

            export_df = breakdown_frame(breakdown)
            st.download_button(
                "CSV",
                data=export_df.to_csv(index=False),
                file_name=f"team_pricing_{billing_interval.value}.csv",
                mime="text/csv",
                use_container_width=True
            )

    with st.expander("View Detailed Pricing Breakdown"):
        st.dataframe(breakdown_frame(breakdown), use_container_width=True, hide_index=True)


# ============================================================================
# TAB 2: PLAN ADVISOR
# ============================================================================
with tab2:
    st.subheader("Plan Advisor")
    levels = ["low", "medium", "high"]

    with st.form("advisor"):
        c1, c2 = st.columns(2)
        with c1:
            team_size = st.number_input("Team size", min_value=1, value=3, step=1)
            call_volume = st.selectbox("Call volume", levels)
            email_volume = st.selectbox("Email volume", levels)
            media_volume = st.selectbox("Media volume", levels)
        with c2:
            analytics_volume = st.selectbox("Analytics volume", levels)
            budget = st.selectbox("Budget sensitivity", levels, index=1)
            needs_voice = st.checkbox("I need AI voice answering")
            needs_insights = st.checkbox("I care about deep analytics")
        submitted = st.form_submit_button("Recommend", type="primary")

    if submitted:
        recommendation = recommend_plan(Questionnaire(
            team_size=int(team_size),
            call_volume=call_volume,
            email_volume=email_volume,
            media_volume=media_volume,
            analytics_volume=analytics_volume,
            needs_voice=needs_voice,
            needs_insights=needs_insights,
            budget_sensitivity=budget,
            billing_interval=billing_interval,
        ), engine)

        st.markdown("#### Suggested seats")
        st.write(", ".join(
            f"{s.count} × {engine.tier_table[s.tier].display_name}"
            for s in recommendation.suggested_seats
        ))
        st.caption(recommendation.reasoning)
        st.info(recommendation.explanation)

        for option in recommendation.alt_options:
            with st.expander(option.label):
                st.write(", ".join(
                    f"{s.count} × {engine.tier_table[s.tier].display_name}"
                    for s in option.suggested_seats
                ))
                st.markdown("**Pros**\n" + "\n".join(f"- {p}" for p in option.pros))
                st.markdown("**Cons**\n" + "\n".join(f"- {c}" for c in option.cons))


# ============================================================================
# TAB 3: TIERS
# ============================================================================
with tab3:
    st.subheader("Tier Prices")
    st.dataframe(engine.tier_table.to_frame(), use_container_width=True, hide_index=True)

    st.subheader("Margin Check (max discount)")
    checks = check_pricing_margins(engine.tier_table)
    st.dataframe(pd.DataFrame([
        {
            'Tier': engine.tier_table[c.tier].display_name,
            'Effective Margin': f"{c.effective_margin * 100:.2f}%",
            'Minimum': f"{c.min_margin * 100:.2f}%",
            'Status': "OK" if c.passed else "Below minimum",
        }
        for c in checks
    ]), use_container_width=True, hide_index=True)

    if all(c.passed for c in checks):
        st.success("All tiers meet minimum margins at the deepest team discount")
    else:
        st.warning("Some tiers fall below their minimum margin")
