"""Voicing Engine — playable chord voicings for fretted instruments.

Sub-modules:
    pitch        – pitch classes and note-name parsing
    chord        – chord types, chord symbols, transposition
    instrument   – strings, tunings, capo
    presets      – preset instruments and tunings
    voicing      – per-string positions, barre, voicing value object
    difficulty   – difficulty score and finger-count heuristics
    search       – voicing enumeration, filtering and deduplication
    capo         – capo suggestions for a progression
    sequencer    – transition costs and neighbour-aware ranking
    arrange      – orchestrates the pipeline for a whole progression
    config       – YAML cost-file loading
"""

__version__ = "0.1.0"
