"""
Display names for MDX commands, operators, notes and channels.
"""

COMMAND_NAMES = {
    0xE6: "Informal command",
    0xE7: "Fade out",
    0xE8: "PCM8 expansion shift",
    0xE9: "LFO delay setting",
    0xEA: "OPM LFO control",
    0xEB: "LFO volume control",
    0xEC: "LFO pitch control",
    0xED: "ADPCM/noise freq",
    0xEE: "Sync signal wait",
    0xEF: "Sync signal send",
    0xF0: "Key on delay",
    0xF1: "Data end",
    0xF2: "Portamento time",
    0xF3: "Detune",
    0xF4: "Repeat escape",
    0xF5: "Repeat end",
    0xF6: "Repeat start",
    0xF7: "Disable key-off",
    0xF8: "Sound length",
    0xF9: "Volume increment",
    0xFA: "Volume decrement",
    0xFB: "Set volume",
    0xFC: "Output phase",
    0xFD: "Set voice #",
    0xFE: "Set OPM register",
    0xFF: "Set tempo",
}

OPERATOR_NAMES = ["M1", "M2", "C1", "C2"]

# MDX note 0 is D# of octave 0
NOTE_NAMES = ["c", "c+", "d", "d+", "e", "f", "f+", "g", "g+", "a", "a+", "b"]
NOTE_BASE = 3


def command_name(opcode: int) -> str:
    """
    Get display name for a command byte.

    Rests and notes are named too, so any byte of a channel stream
    can be labelled.
    """
    if opcode <= 0x7F:
        return "Rest"
    if opcode <= 0xDE:
        return "Note"
    return COMMAND_NAMES.get(opcode, "Unknown")


def operator_name(index: int) -> str:
    """Get operator name (M1, M2, C1, C2) for a voice record slot."""
    return OPERATOR_NAMES[index & 0x03]


def note_name(note: int) -> str:
    """Get MML note name, e.g. 0 -> "d+"."""
    return NOTE_NAMES[(note + NOTE_BASE) % 12]


def note_octave(note: int) -> int:
    """Get MML octave of a note."""
    return (note + NOTE_BASE) // 12


def note_label(note: int) -> str:
    """Get note name with octave, e.g. 45 -> "o4c"."""
    return f"o{note_octave(note)}{note_name(note)}"


def channel_name(channel: int) -> str:
    """
    Get MML channel letter.

    Channels 0-7 are the FM channels A-H, 8-15 the PCM8 channels P-W.
    """
    if channel < 8:
        return chr(ord("A") + channel)
    if channel < 16:
        return chr(ord("P") + channel - 8)
    return "!"
