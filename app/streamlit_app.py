"""Chord Voicer — Streamlit front end.

Minimal interactive application:
    1. Pick an instrument, tuning and capo
    2. Look up voicings for a single chord at a difficulty level
    3. Rank capo positions for a progression
    4. Arrange a progression with smooth transitions and download the JSON

Constraints:
    - No plotting libraries
    - No audio playback
    - Simple, readable code
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Ensure the package is importable without installation
_SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from voicing_engine.arrange import (  # noqa: E402
    arrange,
    arrangement_to_frame,
    arrangement_to_json_bytes,
    capo_suggestions_to_frame,
    voicings_to_frame,
)
from voicing_engine.capo import CapoSuggester, capo_positions_for  # noqa: E402
from voicing_engine.chord import Chord  # noqa: E402
from voicing_engine.presets import INSTRUMENTS, TUNINGS  # noqa: E402
from voicing_engine.search import PRESETS, VoicingSearch  # noqa: E402
from voicing_engine.sequencer import VoicingPreference  # noqa: E402

# ── Page config ───────────────────────────────────────────────
st.set_page_config(
    page_title="Chord Voicer",
    page_icon="🎸",
    layout="wide",
)

st.title("🎸 Chord Voicer")
st.markdown(
    "Find playable voicings, rank capo positions, and arrange a progression "
    "so your fretting hand moves as little as possible."
)
st.divider()

# ── Instrument sidebar ────────────────────────────────────────
with st.sidebar:
    st.header("Instrument")
    instrument_key: str = st.selectbox("Instrument", list(INSTRUMENTS), index=0)
    tunings = TUNINGS[instrument_key]
    tuning_key: str = st.selectbox(
        "Tuning", list(tunings), format_func=lambda k: str(tunings[k])
    )
    capo: int = st.slider("Capo", min_value=0, max_value=12, value=0)
    level: str = st.radio("Level", list(PRESETS), index=1, horizontal=True)

instrument = tunings[tuning_key].apply_to(INSTRUMENTS[instrument_key]).with_capo(capo)
st.caption(f"Playing on **{instrument}**")

tab_chord, tab_capo, tab_arrange = st.tabs(["Chord", "Capo", "Arrange"])

# ── Single chord ──────────────────────────────────────────────
with tab_chord:
    symbol: str = st.text_input("Chord symbol", value="Am")
    limit: int = st.number_input("Show at most", min_value=1, max_value=50, value=10)
    try:
        chord = Chord.parse(symbol)
    except ValueError as exc:
        st.error(str(exc))
    else:
        voicings = VoicingSearch(instrument, PRESETS[level]).find_voicings(chord)
        st.write(f"**{chord.name}**: {len(voicings)} voicing(s) at {level} level")
        if voicings:
            st.dataframe(voicings_to_frame(voicings[:limit]), use_container_width=True)
        else:
            st.info("No voicing matches these constraints. Try a more advanced level.")

# ── Capo suggestions ──────────────────────────────────────────
with tab_capo:
    progression_text: str = st.text_input("Progression", value="F Bb C Dm", key="capo_prog")
    try:
        chords = [Chord.parse(s) for s in progression_text.split()]
    except ValueError as exc:
        st.error(str(exc))
    else:
        suggestions = CapoSuggester(instrument).suggest(chords)
        if suggestions:
            st.success(suggestions[0].description)
            st.dataframe(capo_suggestions_to_frame(suggestions), use_container_width=True)
            st.subheader("Common capo frets per chord")
            for c in dict.fromkeys(chords):
                st.write(f"{c.symbol}: {', '.join(str(p) for p in capo_positions_for(c))}")

# ── Arrangement ───────────────────────────────────────────────
with tab_arrange:
    arrangement_text: str = st.text_input(
        "Progression", value="C G Am F", key="arrange_prog"
    )
    preference = st.selectbox(
        "Preference",
        list(VoicingPreference),
        index=2,
        format_func=lambda p: p.value.replace("_", " "),
    )
    if st.button("▶  Arrange", type="primary"):
        try:
            records = arrange(
                arrangement_text.split(),
                instrument,
                options=PRESETS[level],
                preference=preference,
            )
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.dataframe(arrangement_to_frame(records), use_container_width=True)
            st.download_button(
                label="⬇  Download arrangement.json",
                data=arrangement_to_json_bytes(records),
                file_name="arrangement.json",
                mime="application/json",
            )
