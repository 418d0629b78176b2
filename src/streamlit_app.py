import logging
from datetime import date, timedelta

import pandas as pd
import streamlit as st

from config import settings
from core.errors import DataSourceError, InvalidSearchError
from core.models import DurationRange, SearchParams
from core.routes import place_label
from data_source import get_flight_data_source
from logging_config import setup_logging
from places_service import get_airlines_df, get_places_df, value_from_option
from services.result_bridge import analysis_to_dict, flights_to_records
from stats_store import FlightStatsStore, SqliteStatsRepository

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Thai Fare Seasons",
    layout="wide",
)

SEASON_LABELS = {"low": "🟢 Low season", "normal": "🟡 Normal season", "high": "🔴 High season"}


@st.cache_resource
def load_stats_store() -> FlightStatsStore:
    repository = SqliteStatsRepository(str(settings.stats_db_path))
    return FlightStatsStore(repository, max_price_records=settings.stats_max_price_records)


@st.cache_resource
def load_data_source():
    return get_flight_data_source(settings)


stats_store = load_stats_store()
data_source = load_data_source()

places_df = get_places_df()
airlines_df = get_airlines_df()


st.title("✈️ ค้นหาช่วงเวลาที่ดีที่สุดในการเดินทาง")
st.write("วิเคราะห์ราคาตั๋วเครื่องบินตามฤดูกาล แนะนำช่วงที่ถูกที่สุดให้คุณ")
if settings.use_mock_data:
    st.caption("Prices are simulated, not live airfare data.")

with st.sidebar:
    st.header("Search flights")

    trip_type = st.radio(
        "Trip type",
        options=["round-trip", "one-way"],
        index=0,
    )

    options = places_df["option"].tolist()
    origin_option = st.selectbox("จังหวัดต้นทาง", options=options, index=0)
    destination_option = st.selectbox("จังหวัดปลายทาง", options=options, index=1)

    today = date.today()
    departure_date = st.date_input(
        "Departure date",
        value=today + timedelta(days=30),
        min_value=today,
    )

    return_date = None
    if trip_type == "round-trip":
        return_date = st.date_input(
            "Return date",
            value=departure_date + timedelta(days=5),
            min_value=departure_date,
        )

    passengers = st.number_input("Passengers", min_value=1, value=1, step=1)

    st.markdown("---")

    airline_labels = st.multiselect(
        "Airlines",
        options=airlines_df["label"].tolist(),
        default=airlines_df["label"].tolist(),
        help="Leave empty to price with the default carrier.",
    )

    search_clicked = st.button("Search")


def _duration_range(start: date, end) -> DurationRange:
    # Trip length ±2 days, at least 3
    days = (end - start).days if end else 5
    return DurationRange(min=max(3, days - 2), max=days + 2)


if search_clicked:
    origin = value_from_option(origin_option) or "bangkok"
    destination = value_from_option(destination_option) or ""
    label_to_id = dict(zip(airlines_df["label"], airlines_df["value"]))

    try:
        params = SearchParams(
            origin=origin,
            destination=destination,
            duration_range=_duration_range(departure_date, return_date),
            selected_airlines=[label_to_id[label] for label in airline_labels],
            start_date=departure_date,
            end_date=return_date,
            trip_type=trip_type,
            passenger_count=int(passengers),
            origin_name=place_label(origin),
            destination_name=place_label(destination),
        )
    except InvalidSearchError as e:
        st.error(f"Invalid search: {e}")
        st.stop()

    stats_store.record_search(
        params.origin_name, params.destination_name, params.duration_range.label)

    try:
        analysis = data_source.analyze(params)
    except DataSourceError:
        logger.exception("Analysis failed for %s-%s", origin, destination)
        analysis = None

    if analysis is None:
        st.warning("No analysis available for this search right now.")
        st.stop()

    rp = analysis.recommended_period
    stats_store.record_price(
        origin=params.origin,
        destination=params.destination,
        origin_name=params.origin_name,
        destination_name=params.destination_name,
        recommended_price=rp.price,
        season=rp.season,
        airline=rp.airline,
    )

    st.subheader(f"การวิเคราะห์ราคา - {params.origin_name} → {params.destination_name}")

    # ⭐ Recommended period
    st.markdown("### ⭐ Recommended period")
    col_r1, col_r2, col_r3 = st.columns(3)
    with col_r1:
        st.write(f"{rp.start_date}" + (f" → {rp.return_date}" if rp.return_date else ""))
        st.caption(SEASON_LABELS.get(rp.season, rp.season))
    with col_r2:
        st.metric(label="Estimated total price", value=f"฿{rp.price:,.0f}")
    with col_r3:
        st.metric(
            label="Savings vs high season",
            value=f"฿{rp.savings:,.0f}",
            help=f"Cheapest airline for these dates: {rp.airline}",
        )

    # Before / after
    pc = analysis.price_comparison
    col_b, col_a = st.columns(2)
    for col, label, point in (
        (col_b, "If you go a week earlier", pc.if_go_before),
        (col_a, "If you go a week later", pc.if_go_after),
    ):
        with col:
            st.metric(
                label=f"{label} · {point.date}",
                value=f"฿{point.price:,.0f}",
                delta=f"{point.difference:+,.0f} ({point.percentage:+d}%)",
                delta_color="inverse",
            )

    st.markdown("---")

    # Season cards
    st.markdown("### Seasonal breakdown")
    season_cols = st.columns(len(analysis.seasons))
    for col, season in zip(season_cols, analysis.seasons):
        with col:
            st.markdown(f"**{SEASON_LABELS.get(season.type, season.type)}**")
            st.caption(", ".join(season.months))
            st.metric(
                label=f"Best deal · {season.best_deal.dates}",
                value=f"฿{season.best_deal.price:,.0f}",
                help=season.best_deal.airline,
            )
            st.caption(
                f"฿{season.price_range.min:,.0f} - ฿{season.price_range.max:,.0f} · {season.description}")

    # Price trend
    st.markdown("### Price trend")
    chart_df = pd.DataFrame(analysis_to_dict(analysis)["priceChartData"])
    if not chart_df.empty:
        chart_df = chart_df.set_index("startDate")
        st.line_chart(chart_df["price"])
        st.dataframe(chart_df[["returnDate", "price", "season", "duration"]], width="stretch")

    # Flights per airline
    st.markdown("### Flights")
    airline_ids = params.selected_airlines or airlines_df["value"].tolist()
    try:
        flights = [
            f
            for airline_id in airline_ids
            for f in data_source.flights_for_airline(
                airline_id, params.origin, params.destination, params.start_date, params.end_date)
        ]
    except DataSourceError:
        logger.exception("Flight list failed for %s-%s", origin, destination)
        flights = []

    if flights:
        st.dataframe(pd.DataFrame(flights_to_records(flights)), width="stretch")
    else:
        st.info("No flights to show.")

    st.caption(
        "Recommendations combine the destination's seasons, airline fares, the day of week, "
        "nearby festivals and how far ahead you book."
    )
else:
    st.info("Use the sidebar to configure a search, then click **Search**. 🚀")


# Usage statistics
st.markdown("---")
st.markdown("### 📊 Search statistics")
col_s1, col_s2, col_s3, col_s4 = st.columns(4)
with col_s1:
    st.metric("Total searches", stats_store.total_search_count())
with col_s2:
    top_destination = stats_store.most_searched_destination()
    st.metric(
        "Most searched destination",
        f"{top_destination['destination']} ({top_destination['count']})" if top_destination else "-",
    )
with col_s3:
    top_duration = stats_store.most_searched_duration()
    duration_label = top_duration["durationLabel"] if top_duration else "-"
    # legacy labels already carry the unit
    if top_duration and not duration_label.endswith("วัน"):
        duration_label = f"{duration_label} วัน"
    st.metric("Most searched trip length", duration_label)
with col_s4:
    avg = stats_store.average_price()
    trend = stats_store.price_trend()
    st.metric(
        "Average recommended price",
        f"฿{avg:,}" if avg is not None else "-",
        delta=(f"{'+' if trend['direction'] == 'up' else '-'}{trend['percentage']}%"
               if trend and trend["direction"] != "stable" else None),
        delta_color="inverse",
    )
