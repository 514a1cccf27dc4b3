import streamlit as st
import sys
from pathlib import Path
from datetime import datetime, time

# Ajouter la racine du projet au path AVANT les imports locaux
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from models import Workout, WorkoutType, describe
from utils.pace_calculator import format_distance, format_duration, format_pace
from utils.workout_store import JsonWorkoutStore


st.set_page_config(page_title="Séances", page_icon="📋", layout="wide")

st.title("📋 Séances")

store = JsonWorkoutStore()

# ===== SAISIE MANUELLE =====
with st.expander("➕ Ajouter une séance"):
    col1, col2 = st.columns(2)
    with col1:
        workout_type = st.selectbox("Type", list(WorkoutType), format_func=lambda t: t.value)
        st.caption(describe(workout_type))
        title = st.text_input("Titre")
    with col2:
        workout_date = st.date_input("Date")
        workout_time = st.time_input("Heure", value=time(18, 0))

    number_of_reps = st.number_input("Nombre de répétitions", min_value=1, max_value=30, value=1)
    reps = []
    for i in range(int(number_of_reps)):
        col_d, col_t = st.columns(2)
        with col_d:
            distance = st.number_input(f"Distance #{i + 1} (m)", min_value=0.0, step=100.0, key=f"dist_{i}")
        with col_t:
            duration = st.number_input(f"Durée #{i + 1} (s)", min_value=0.0, step=1.0, key=f"dur_{i}")
        if distance > 0 or duration > 0:
            reps.append((distance, duration))

    notes = st.text_area("Notes", key="manual_notes")

    if st.button("💾 Enregistrer", disabled=not title.strip()):
        workout = Workout.from_manual_entry(
            date=datetime.combine(workout_date, workout_time),
            workout_type=workout_type,
            title=title.strip(),
            reps=reps,
            notes=notes
        )
        store.insert(workout)
        st.success(f"✅ Séance enregistrée : {format_distance(workout.total_distance)}")
        st.rerun()

st.divider()

# ===== HISTORIQUE =====
workouts = store.query_all()
if not workouts:
    st.info("Aucune séance pour le moment")
    st.stop()

for workout in workouts:
    badge = "⏱️ " if workout.is_live_tracked else ""
    with st.expander(f"{badge}{workout.title} · {workout.date.strftime('%d/%m/%Y %H:%M')}"):
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Type", workout.workout_type.value)
        with col2:
            st.metric("Distance", format_distance(workout.total_distance))
        with col3:
            st.metric("Durée", format_duration(workout.total_duration))
        with col4:
            st.metric("Allure", format_pace(workout.average_pace))

        for rep in workout.repetitions:
            st.write(
                f"#{rep.rep_number} · {rep.distance:.0f} m · {format_duration(rep.duration)}"
                f" · {format_pace(rep.pace) if rep.distance > 0 else 'N/A'}"
            )
        if workout.notes:
            st.caption(workout.notes)

        if st.button("🗑️ Supprimer", key=f"delete_{workout.id}"):
            store.delete(workout)
            st.rerun()
