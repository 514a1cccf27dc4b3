import streamlit as st
import sys
from pathlib import Path

# Ajouter la racine du projet au path AVANT les imports locaux
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import STREAMLIT_CONFIG, configure_logging
from core.workout_timer import WorkoutTimer
from models import WorkoutType, TimerState, describe
from utils.pace_calculator import format_distance, format_duration, format_pace, format_timer, calculate_pace
from utils.ui_helpers import get_state_label
from utils.workout_store import JsonWorkoutStore


st.set_page_config(**STREAMLIT_CONFIG)

# Un seul chronomètre par session Streamlit (rafraîchi à chaque rerun)
if 'workout_timer' not in st.session_state:
    configure_logging()
    st.session_state.workout_timer = WorkoutTimer(auto_tick=False)
    st.session_state.recovered = st.session_state.workout_timer.state == TimerState.PAUSED
    st.session_state.lap_duration = None

timer: WorkoutTimer = st.session_state.workout_timer
store = JsonWorkoutStore()
timer.tick()
snapshot = timer.snapshot()

st.title("⏱️ Séance en direct")
st.caption(get_state_label(snapshot.state))

# ===== DÉMARRAGE =====
if snapshot.state == TimerState.IDLE:
    workout_type = st.selectbox(
        "Type de séance",
        list(WorkoutType),
        format_func=lambda t: f"{t.value} · {describe(t)}"
    )
    title = st.text_input("Titre", placeholder=f"{workout_type.value} Workout")

    if st.button("▶️ DÉMARRER", type="primary", use_container_width=True):
        timer.start(workout_type, title)
        st.rerun()
    st.stop()

# ===== REPRISE APRÈS CRASH =====
if st.session_state.get('recovered'):
    st.warning("⚠️ Une séance inachevée a été retrouvée, en pause. Reprenez-la avec ▶️ Reprendre ou abandonnez-la.")
    col_r1, col_r2 = st.columns(2)
    with col_r1:
        if st.button("Masquer", key="hide_recovered"):
            st.session_state.recovered = False
            st.rerun()
    with col_r2:
        if st.button("🗑️ Abandonner", key="discard_recovered"):
            timer.discard()
            st.session_state.recovered = False
            st.rerun()

st.header(f"{snapshot.workout_title} · {snapshot.workout_type.value}")

# ===== SÉANCE EN COURS =====
if snapshot.is_active:
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Temps total", format_timer(snapshot.total_elapsed_time))
    with col2:
        st.metric(f"Répétition {snapshot.rep_count + 1}", format_timer(snapshot.current_rep_elapsed_time))
    with col3:
        st.metric("Récupération", format_timer(snapshot.current_rest_elapsed_time))

    if st.session_state.lap_duration is None:
        col_a, col_b, col_c, col_d = st.columns(4)
        with col_a:
            if snapshot.state == TimerState.RUNNING:
                if st.button("⏸️ Pause", use_container_width=True):
                    timer.pause()
                    st.rerun()
            elif st.button("▶️ Reprendre", use_container_width=True):
                timer.resume()
                st.session_state.recovered = False
                st.rerun()
        with col_b:
            if st.button("🏁 Tour", use_container_width=True):
                st.session_state.lap_duration = timer.complete_lap()
                st.rerun()
        with col_c:
            if st.button("⏹️ Terminer", use_container_width=True):
                timer.stop()
                st.rerun()
        with col_d:
            st.button("🔄 Rafraîchir", use_container_width=True)
    else:
        # Saisie de la distance du tour terminé
        lap_duration = st.session_state.lap_duration
        st.subheader(f"Tour terminé : {format_duration(lap_duration)}")
        distance = st.number_input("Distance (m)", min_value=0.0, step=100.0, value=0.0)
        if distance > 0:
            st.caption(f"Allure : {format_pace(calculate_pace(distance, lap_duration))}")

        col_s1, col_s2 = st.columns(2)
        with col_s1:
            if st.button("✅ Enregistrer", disabled=distance <= 0, use_container_width=True):
                timer.record_rep(distance, lap_duration)
                st.session_state.lap_duration = None
                st.rerun()
        with col_s2:
            if st.button("Passer", use_container_width=True):
                timer.record_rep(0, lap_duration)
                st.session_state.lap_duration = None
                st.rerun()

# ===== RÉCAPITULATIF =====
if snapshot.state == TimerState.COMPLETED:
    preview = timer.to_workout()

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Distance", format_distance(preview.total_distance))
    with col2:
        st.metric("Durée", format_duration(preview.total_duration))
    with col3:
        st.metric("Allure moy.", format_pace(preview.average_pace))

    st.subheader(f"Répétitions ({len(preview.repetitions)})")
    for rep in preview.repetitions:
        pace = format_pace(rep.pace) if rep.distance > 0 else "N/A"
        st.write(f"**#{rep.rep_number}** · {rep.distance:.0f} m · {format_duration(rep.duration)} · {pace}")

    notes = st.text_area("Notes")

    col_save, col_discard = st.columns(2)
    with col_save:
        if st.button("💾 ENREGISTRER LA SÉANCE", type="primary", use_container_width=True):
            timer.save_workout(store, notes)
            st.success("Séance enregistrée !")
            st.rerun()
    with col_discard:
        if st.button("🗑️ ABANDONNER", use_container_width=True):
            timer.discard()
            st.rerun()
