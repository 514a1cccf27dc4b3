import streamlit as st
import sys
from pathlib import Path
import plotly.graph_objects as go
import plotly.express as px

# Ajouter la racine du projet au path AVANT les imports locaux
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from core.workout_stats import (
    weekly_distance_totals, pace_progression, workout_frequency, personal_records, filter_by_period
)
from models import TimePeriod, WorkoutType
from utils.pace_calculator import format_distance, format_pace
from utils.workout_store import JsonWorkoutStore


st.set_page_config(page_title="Progression", page_icon="📈", layout="wide")

st.title("📈 Progression")

workouts = JsonWorkoutStore().query_all()

if not workouts:
    st.info("💡 Aucune séance enregistrée. Lancez une séance depuis la page d'accueil !")
    st.stop()

period = st.radio(
    "Période",
    list(TimePeriod),
    format_func=lambda p: p.value,
    horizontal=True,
    index=1
)
workouts = filter_by_period(workouts, period)

if not workouts:
    st.warning("⚠️ Aucune séance sur cette période.")
    st.stop()

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Séances", len(workouts))
with col2:
    st.metric("Distance", format_distance(sum(w.total_distance or 0 for w in workouts)))
with col3:
    paces = [w.average_pace for w in workouts if w.average_pace]
    st.metric("Allure moyenne", format_pace(sum(paces) / len(paces)) if paces else "N/A")

st.divider()

col_left, col_right = st.columns([1, 1])

with col_left:
    st.subheader("📏 Distance par semaine")

    weekly = weekly_distance_totals(workouts)
    fig_distance = go.Figure()
    fig_distance.add_trace(go.Bar(
        x=[w.week_start_date for w in weekly],
        y=[w.total_distance / 1000 for w in weekly],
        marker_color='lightblue',
        text=[format_distance(w.total_distance) for w in weekly],
        textposition='outside'
    ))
    fig_distance.update_layout(
        height=350,
        xaxis_title="Semaine",
        yaxis_title="Distance (km)",
        showlegend=False,
        hovermode='x unified'
    )
    st.plotly_chart(fig_distance, use_container_width=True)

with col_right:
    st.subheader("📅 Fréquence")

    frequency = workout_frequency(workouts, TimePeriod.WEEK if period == TimePeriod.WEEK else TimePeriod.MONTH)
    fig_frequency = go.Figure()
    fig_frequency.add_trace(go.Bar(
        x=[f.period_start for f in frequency],
        y=[f.workout_count for f in frequency],
        marker_color='orange'
    ))
    fig_frequency.update_layout(
        height=350,
        xaxis_title="Période",
        yaxis_title="Séances",
        showlegend=False
    )
    st.plotly_chart(fig_frequency, use_container_width=True)

st.subheader("⚡ Évolution de l'allure")

points = pace_progression(workouts)
if points:
    fig_pace = go.Figure()
    colors = px.colors.qualitative.Set2
    for i, workout_type in enumerate(WorkoutType):
        type_points = [p for p in points if p.workout_type == workout_type]
        if not type_points:
            continue
        fig_pace.add_trace(go.Scatter(
            x=[p.date for p in type_points],
            y=[p.average_pace / 60 for p in type_points],
            mode='lines+markers',
            marker=dict(color=colors[i % len(colors)], size=10),
            name=workout_type.value
        ))
    fig_pace.update_layout(
        height=300,
        xaxis_title="Date",
        yaxis_title="Allure (min/km)",
        yaxis=dict(autorange="reversed"),  # Plus rapide = plus haut
        hovermode='x unified'
    )
    st.plotly_chart(fig_pace, use_container_width=True)
else:
    st.info("Aucune allure disponible (séances sans distance)")

st.subheader("🏆 Records personnels")

records = personal_records(workouts)
if records:
    cols = st.columns(min(len(records), 3))
    for i, record in enumerate(records):
        with cols[i % len(cols)]:
            st.metric(
                record.workout_type.value,
                format_pace(record.best_pace),
                f"{format_distance(record.distance)} · {record.achieved_date.strftime('%d/%m/%Y')}",
                delta_color="off"
            )
else:
    st.info("Pas encore de record")
