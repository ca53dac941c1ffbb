"""
YM2151 voice (instrument) models.

An MDX voice record is 27 bytes: three voice-wide bytes followed by six
groups of four bytes, one byte per operator in each group.

    Offset  Fields
    0       Voice number
    1       Feedback (bits 3-5), algorithm (bits 0-2)
    2       Slot mask
    3-6     DT1 (bits 4-6), MUL (bits 0-3)
    7-10    TL
    11-14   KS (bits 6-7), AR (bits 0-4)
    15-18   AMS-EN (bit 7), D1R (bits 0-4)
    19-22   DT2 (bits 6-7), D2R (bits 0-4)
    23-26   D1L (bits 4-7), RR (bits 0-3)
"""

from dataclasses import dataclass, field
from typing import List

from mdxconv.utils.naming import operator_name
from mdxconv.utils.validation import VOICE_RECORD_SIZE, validate_voice_record

# Pan is not part of the voice record. Both outputs enabled (L+R) until a
# channel's pan command says otherwise.
DEFAULT_PAN = 0xC0

NUM_OPERATORS = 4


@dataclass
class Oscillator:
    """Parameters of one FM operator."""

    detune1: int = 0  # DT1 (3 bits)
    detune2: int = 0  # DT2 (2 bits)
    multiple: int = 0  # MUL (4 bits)
    total_level: int = 0  # TL (8 bits)
    key_scale: int = 0  # KS (2 bits)
    attack_rate: int = 0  # AR (5 bits)
    amplitude_mod_enable: int = 0  # AMS-EN (1 bit)
    decay1_rate: int = 0  # D1R (5 bits)
    decay2_rate: int = 0  # D2R (5 bits)
    decay1_level: int = 0  # D1L (4 bits)
    release_rate: int = 0  # RR (4 bits)

    def dump(self) -> str:
        return "\n".join(
            [
                f"\tdt1={self.detune1} dt2={self.detune2} mul={self.multiple}",
                f"\ttl={self.total_level} ks={self.key_scale} ar={self.attack_rate}",
                f"\tame={self.amplitude_mod_enable} rr={self.release_rate}",
                f"\td1r={self.decay1_rate} d2r={self.decay2_rate} d1l={self.decay1_level}",
            ]
        )


@dataclass
class Voice:
    """
    A four-operator FM voice definition.

    Attributes:
        number: Voice number referenced by the set-voice command
        feedback: Operator 1 self-feedback level (3 bits)
        algorithm: Operator connection (3 bits)
        slot_mask: Operators enabled on key-on
        pan: Output assignment, always DEFAULT_PAN
        oscillators: Exactly four operators, M1, M2, C1, C2 order
    """

    number: int = 0
    feedback: int = 0
    algorithm: int = 0
    slot_mask: int = 0
    pan: int = DEFAULT_PAN
    oscillators: List[Oscillator] = field(
        default_factory=lambda: [Oscillator() for _ in range(NUM_OPERATORS)]
    )

    @classmethod
    def from_bytes(cls, record: bytes) -> "Voice":
        """
        Parse a 27-byte voice record.

        Args:
            record: Raw voice record

        Returns:
            Parsed Voice

        Raises:
            MDXFormatError: If the record has the wrong size
        """
        validate_voice_record(record)

        oscillators = []
        for i in range(NUM_OPERATORS):
            oscillators.append(
                Oscillator(
                    detune1=(record[3 + i] >> 4) & 0x07,
                    multiple=record[3 + i] & 0x0F,
                    total_level=record[7 + i],
                    key_scale=(record[11 + i] >> 6) & 0x03,
                    attack_rate=record[11 + i] & 0x1F,
                    amplitude_mod_enable=(record[15 + i] >> 7) & 0x01,
                    decay1_rate=record[15 + i] & 0x1F,
                    detune2=(record[19 + i] >> 6) & 0x03,
                    decay2_rate=record[19 + i] & 0x1F,
                    decay1_level=(record[23 + i] >> 4) & 0x0F,
                    release_rate=record[23 + i] & 0x0F,
                )
            )

        return cls(
            number=record[0],
            feedback=(record[1] >> 3) & 0x07,
            algorithm=record[1] & 0x07,
            slot_mask=record[2],
            oscillators=oscillators,
        )

    def to_bytes(self) -> bytes:
        """
        Pack the voice back into its 27-byte record.

        Unused bits are written as zero.
        """
        record = bytearray(VOICE_RECORD_SIZE)
        record[0] = self.number & 0xFF
        record[1] = ((self.feedback & 0x07) << 3) | (self.algorithm & 0x07)
        record[2] = self.slot_mask & 0xFF

        for i, osc in enumerate(self.oscillators):
            record[3 + i] = ((osc.detune1 & 0x07) << 4) | (osc.multiple & 0x0F)
            record[7 + i] = osc.total_level & 0xFF
            record[11 + i] = ((osc.key_scale & 0x03) << 6) | (osc.attack_rate & 0x1F)
            record[15 + i] = ((osc.amplitude_mod_enable & 0x01) << 7) | (osc.decay1_rate & 0x1F)
            record[19 + i] = ((osc.detune2 & 0x03) << 6) | (osc.decay2_rate & 0x1F)
            record[23 + i] = ((osc.decay1_level & 0x0F) << 4) | (osc.release_rate & 0x0F)

        return bytes(record)

    def dump(self) -> str:
        """Text dump of every parameter, one operator per block."""
        lines = [
            f"Voice {self.number}",
            f"fl={self.feedback} con={self.algorithm} pan={self.pan} "
            f"slot_mask=0x{self.slot_mask:02x}",
        ]
        for i, osc in enumerate(self.oscillators):
            lines.append(f"Osc {i} ({operator_name(i)})")
            lines.append(osc.dump())
        return "\n".join(lines)
