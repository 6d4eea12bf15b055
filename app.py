import datetime as dt
import logging
from typing import Optional, Tuple

import plotly.graph_objects as go
import streamlit as st

from vitaltrack import formatting
from vitaltrack.config import MIN_COMMITTED_SESSIONS, WINDOW_DAYS, Settings, load_settings
from vitaltrack.metrics import DashboardSummary, summarize
from vitaltrack.models import INTENSITIES, MOODS, ValidationError
from vitaltrack.state import Dashboard
from vitaltrack.store import LocalFileStore, MemoryStore, StateStore, open_sheet_store
from vitaltrack.tables import health_log, training_log
from vitaltrack.trend import HEIGHT, WIDTH, TrendChart, project, weight_series

st.set_page_config(page_title="VitalTrack", layout="wide")
logger = logging.getLogger("vitaltrack.app")

COL = {
    "line": "rgba(125,150,180,.26)",
    "text": "#e8eef8",
    "muted": "#9db0cc",
    "trend": "rgb(16,185,129)",
    "trend_fill": "rgba(16,185,129,.22)",
    "good": "#5CFF9D",
    "danger": "#FF6D7B",
}
CHART_CFG = {"displayModeBar": False}


def theme() -> None:
    st.markdown(
        f"""
        <style>
        @import url('https://fonts.googleapis.com/css2?family=Outfit:wght@400;600;700;800&display=swap');
        .stApp {{
            font-family: "Outfit", sans-serif; color:{COL["text"]};
            background: radial-gradient(900px 420px at 92% -6%, rgba(16,185,129,.12), transparent 58%),
                        radial-gradient(800px 400px at -8% 3%, rgba(88,168,255,.10), transparent 58%),
                        linear-gradient(145deg,#060915,#0b1327);
        }}
        .stMarkdown p, .stMarkdown li, label {{color:{COL['text']} !important;}}
        .block-container {{padding-top:.55rem; padding-bottom:.75rem; max-width:1320px;}}
        section[data-testid="stSidebar"] > div {{background:linear-gradient(180deg,#0f172c,#121d36); border-right:1px solid rgba(125,150,180,.38);}}
        section[data-testid="stSidebar"] label,
        section[data-testid="stSidebar"] .stMarkdown p {{color:#e9f1ff !important;}}
        [data-testid="stHeader"] {{background:rgba(0,0,0,0);}}
        div[data-testid="stForm"] {{background:rgba(10,14,28,.92); border:1px solid {COL["line"]}; border-radius:14px; padding:.8rem .8rem .3rem .8rem;}}
        div[data-testid="stVerticalBlockBorderWrapper"] {{background:linear-gradient(180deg,rgba(15,21,40,.88),rgba(9,13,28,.92)); border:1px solid {COL["line"]} !important; border-radius:14px; padding:.5rem .62rem;}}
        .stFormSubmitButton > button {{background:#10b981 !important; color:#041223 !important; font-weight:800 !important;}}
        .kpi {{border:1px solid {COL["line"]}; border-radius:14px; padding:.56rem .66rem; min-height:124px; display:flex; flex-direction:column; justify-content:space-between;}}
        .k1 {{background:linear-gradient(145deg,rgba(32,71,52,.56),rgba(12,27,24,.72));}}
        .k2 {{background:linear-gradient(145deg,rgba(24,69,86,.56),rgba(12,25,35,.74));}}
        .k3 {{background:linear-gradient(145deg,rgba(56,37,86,.60),rgba(20,13,32,.76));}}
        .k4 {{background:linear-gradient(145deg,rgba(88,62,20,.58),rgba(30,20,12,.74));}}
        .kh {{font-size:.82rem; letter-spacing:.06em; text-transform:uppercase; font-weight:700; margin:0; color:{COL["muted"]};}}
        .kv {{font-size:2rem; font-weight:800; margin:.16rem 0 .04rem 0; line-height:1.1;}}
        .ks {{display:inline-block; font-size:.76rem; border:1px solid {COL["line"]}; border-radius:999px; padding:.1rem .55rem; margin:0;}}
        .ks.up {{color:{COL["good"]};}}
        .ks.down {{color:{COL["danger"]}; background:rgba(84,35,43,.45);}}
        .sec-k {{color:#7cf6bb; letter-spacing:.12em; text-transform:uppercase; font-size:.68rem; font-weight:700; margin:0 0 .12rem 0;}}
        .sec-t {{font-size:1.6rem; font-weight:700; margin:0;}}
        .sec-s {{font-size:.82rem; color:{COL["muted"]}; margin:.1rem 0 0 0;}}
        .pt {{font-size:.98rem; font-weight:700; margin:0;}}
        .pn {{font-size:.79rem; color:{COL["muted"]}; margin:.05rem 0 0 0;}}
        .checkin {{border:1px solid rgba(16,185,129,.45); border-radius:14px; padding:.6rem .8rem; background:rgba(16,185,129,.08);}}
        .checkin.empty {{border-style:dashed; text-align:center;}}
        .focus {{padding:.6rem .75rem; border:1px solid {COL['line']}; border-radius:12px; background:rgba(12,20,39,.72); margin:.28rem 0; font-size:.88rem;}}
        .focus.hl {{background:rgba(16,185,129,.12); color:#a7f3d0;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def section(k: str, t: str, s: str) -> None:
    st.markdown(f"<p class='sec-k'>{k}</p><p class='sec-t'>{t}</p><p class='sec-s'>{s}</p>", unsafe_allow_html=True)


def ptitle(t: str, n: str = "") -> None:
    nhtml = f"<p class='pn'>{n}</p>" if n else ""
    st.markdown(f"<p class='pt'>{t}</p>{nhtml}", unsafe_allow_html=True)


def stat_card(cls: str, label: str, value: str, change: Optional[Tuple[str, bool]] = None) -> None:
    chip = ""
    if change is not None:
        text, positive = change
        chip = f"<p class='ks {'up' if positive else 'down'}'>{text}</p>"
    st.markdown(f"<div class='kpi {cls}'><p class='kh'>{label}</p><p class='kv'>{value}</p><div>{chip}</div></div>", unsafe_allow_html=True)


def trend_figure(chart: TrendChart) -> go.Figure:
    # The projection already lives in canvas units, so the axes are the canvas itself.
    fig = go.Figure()
    fig.add_shape(type="path", path=chart.area_path, fillcolor=COL["trend_fill"], line=dict(width=0), layer="below")
    fig.add_shape(type="path", path=chart.line_path, line=dict(color=COL["trend"], width=3))
    fig.add_trace(
        go.Scatter(
            x=[p.x for p in chart.points],
            y=[p.y for p in chart.points],
            mode="markers+text",
            text=[p.label for p in chart.points],
            textposition="top center",
            textfont=dict(color=COL["muted"], size=11),
            marker=dict(size=9, color="#fff", line=dict(color=COL["trend"], width=2)),
            hoverinfo="skip",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[p.x for p in chart.points],
            y=[chart.height - 4] * len(chart.points),
            mode="text",
            text=[p.date_label for p in chart.points],
            textfont=dict(color=COL["muted"], size=10),
            hoverinfo="skip",
        )
    )
    fig.update_layout(
        height=260,
        showlegend=False,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=0, r=0, t=8, b=0),
        font=dict(family="Outfit, sans-serif", color=COL["text"]),
    )
    fig.update_xaxes(range=[0, WIDTH], visible=False, fixedrange=True)
    fig.update_yaxes(range=[HEIGHT, 0], visible=False, fixedrange=True)
    return fig


def open_store(settings: Settings) -> Tuple[StateStore, str]:
    try:
        if settings.storage_backend == "sheets":
            store: StateStore = open_sheet_store(
                st.secrets["gcp_service_account"], str(settings.google_sheet_url), settings.state_worksheet_name
            )
        else:
            store = LocalFileStore(settings.data_dir)
        return store, ""
    except Exception as ex:
        logger.warning("Storage setup failed, keeping entries for this session only: %s", ex)
        return MemoryStore(), f"{type(ex).__name__}: {ex}"


def submit(add, form: dict, ok: str) -> None:
    try:
        add(form)
    except ValidationError as exc:
        st.error(str(exc))
        return
    st.session_state["ok"] = ok
    st.rerun()


theme()
settings = Settings()
setup_error = ""
try:
    settings = load_settings(st.secrets)
except Exception as ex:
    setup_error = f"{type(ex).__name__}: {ex}"
logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(name)s: %(message)s")

if "dashboard" not in st.session_state:
    with st.spinner("Loading your VitalTrack data…"):
        store, store_error = open_store(settings)
        dash = Dashboard(store, key=settings.storage_key)
        dash.hydrate()
    st.session_state["dashboard"] = dash
    st.session_state["store_error"] = store_error
dash = st.session_state["dashboard"]
if not dash.hydrated:
    st.info("Loading your VitalTrack data…")
    st.stop()

today = dt.date.today()

with st.sidebar:
    if "ok" in st.session_state:
        st.success(st.session_state["ok"])
        del st.session_state["ok"]

    st.markdown("### Daily Health Check-in")
    with st.form("health_form", clear_on_submit=False):
        h_day = st.date_input("Date", value=today, format="YYYY-MM-DD", key="h_date")
        c1, c2 = st.columns(2)
        sleep = c1.number_input("Sleep (hrs)", min_value=0.0, step=0.5, value=7.0)
        water = c2.number_input("Water (L)", min_value=0.0, step=0.1, value=2.5)
        calories = st.number_input("Calories", min_value=0, step=25, value=2100)
        mood = st.radio("Mood", MOODS, index=MOODS.index("steady"), horizontal=True, format_func=str.capitalize)
        h_notes = st.text_area("Notes (energy, stress, wins)", placeholder="How did you feel today?")
        h_submit = st.form_submit_button("Save daily check-in")
    if h_submit:
        submit(
            dash.add_health,
            {"date": h_day, "sleep_hours": sleep, "water_liters": water, "calories": calories, "mood": mood, "notes": h_notes},
            "Check-in saved.",
        )

    st.markdown("### Workout Session")
    with st.form("workout_form", clear_on_submit=False):
        w_day = st.date_input("Date", value=today, format="YYYY-MM-DD", key="w_date")
        w_type = st.text_input("Session Focus", value="Strength", placeholder="Strength, run, yoga...")
        c3, c4 = st.columns(2)
        duration = c3.number_input("Duration (min)", min_value=5, step=5, value=45)
        burned = c4.number_input("Calories burned", min_value=0, step=25, value=450)
        intensity = st.radio("Intensity", INTENSITIES, index=INTENSITIES.index("medium"), horizontal=True, format_func=str.capitalize)
        w_notes = st.text_area("Session notes", placeholder="Key lifts, pace, how you felt...")
        w_submit = st.form_submit_button("Log workout")
    if w_submit:
        submit(
            dash.add_workout,
            {"date": w_day, "type": w_type, "duration_minutes": duration, "intensity": intensity, "calories_burned": burned, "notes": w_notes},
            "Workout logged.",
        )

    st.markdown("### Weight Check")
    with st.form("weight_form", clear_on_submit=False):
        g_day = st.date_input("Date", value=today, format="YYYY-MM-DD", key="g_date")
        c5, c6 = st.columns(2)
        weight_kg = c5.number_input("Weight (kg)", min_value=20.0, step=0.1, value=70.0)
        body_fat = c6.number_input("Body fat %", min_value=0.0, max_value=75.0, step=0.1, value=18.0)
        g_submit = st.form_submit_button("Record measurement")
    if g_submit:
        submit(dash.add_weight, {"date": g_day, "weight_kg": weight_kg, "body_fat": body_fat}, "Measurement recorded.")

    if st.session_state.get("store_error"):
        st.warning(f"Storage unavailable ({st.session_state['store_error']}). Entries last for this session only.")
    if setup_error:
        st.caption(f"Using default settings because secrets could not be read ({setup_error}).")


summary: DashboardSummary = summarize(dash.state, today, settings.weight_goal)

head = st.columns([3, 1.3], gap="small")
with head[0]:
    section(
        "VitalTrack",
        "Your Health & Training Command Center",
        "See the key inputs that drive your energy, track structured workouts, and stay accountable to your body composition goals.",
    )
with head[1]:
    latest = summary.latest_health
    if latest is not None:
        st.markdown(
            f"<div class='checkin'><p class='kh'>Last check-in</p><p class='pt'>{formatting.days_ago(latest.date, today).capitalize()}</p>"
            f"<p class='pn'>Mood: {latest.mood}</p></div>",
            unsafe_allow_html=True,
        )
    else:
        st.markdown("<div class='checkin empty'><p class='pn'>Log your first check-in to unlock insights.</p></div>", unsafe_allow_html=True)

k = st.columns(4, gap="small")
with k[0]:
    stat_card(
        "k1",
        f"Average Sleep ({WINDOW_DAYS}d)",
        f"{summary.average_sleep:.1f} hrs",
        None if latest is None else (f"Last night {formatting.number(latest.sleep_hours)} hrs", bool(summary.sleep_on_target)),
    )
with k[1]:
    stat_card(
        "k2",
        f"Hydration ({WINDOW_DAYS}d avg)",
        f"{summary.average_water:.1f} L",
        None if latest is None else (f"Yesterday {formatting.number(latest.water_liters)} L", bool(summary.water_on_target)),
    )
with k[2]:
    last_w = summary.last_workout
    stat_card(
        "k3",
        "Workouts Completed",
        f"{len(summary.recent_workouts)} / {WINDOW_DAYS} days",
        None if last_w is None else (f"Last: {formatting.month_day(last_w.date)}", True),
    )
with k[3]:
    wc = summary.weight_change
    stat_card(
        "k4",
        "Weight Change",
        "Add weight log" if summary.latest_weight is None else f"{summary.latest_weight.weight_kg:.1f} kg",
        None if wc is None else (f"{formatting.signed(wc.delta)} kg vs {formatting.month_day(wc.previous.date)}", wc.favourable),
    )

r1 = st.columns([2, 1], gap="small")
with r1[0]:
    with st.container(border=True):
        ptitle("Weight trajectory")
        chart = project(weight_series(dash.state.weight), unit="kg")
        if chart:
            st.plotly_chart(trend_figure(chart), use_container_width=True, config=CHART_CFG)
        else:
            st.markdown("<p class='pn'>Add entries to see your trend.</p>", unsafe_allow_html=True)
with r1[1]:
    with st.container(border=True):
        ptitle("Weekly focus")
        st.markdown(
            f"<div class='focus hl'>Fuel consistency: target {summary.daily_calories} kcal daily average.</div>"
            f"<div class='focus'>Commit to <strong>{summary.committed_sessions}</strong> sessions. Add deload notes when intensity is \"high\".</div>"
            "<div class='focus'>Prioritize sleep before heavy training days to keep the readiness score green.</div>",
            unsafe_allow_html=True,
        )
        if len(summary.recent_workouts) < MIN_COMMITTED_SESSIONS:
            st.markdown(
                f"<p class='pn'>{MIN_COMMITTED_SESSIONS - len(summary.recent_workouts)} more to hit the weekly minimum.</p>",
                unsafe_allow_html=True,
            )

with st.container(border=True):
    ptitle("Recent health log", "Sleep, hydration, and fuel data for the past two weeks.")
    h_tbl = health_log(dash.state.health)
    if h_tbl.empty:
        st.info("No daily check-ins yet. Log your first entry to see it here.")
    else:
        st.dataframe(h_tbl, use_container_width=True, hide_index=True)

with st.container(border=True):
    ptitle("Training sessions", "Load management and intensity notes keep you from overreaching.")
    t_tbl = training_log(dash.state.workouts)
    if t_tbl.empty:
        st.info("No workouts logged. Add your training sessions from the sidebar.")
    else:
        st.dataframe(t_tbl, use_container_width=True, hide_index=True)
