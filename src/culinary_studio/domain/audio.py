"""Raw speech audio returned by the text-to-speech call."""

import sys
from array import array
from dataclasses import dataclass

SPEECH_SAMPLE_RATE = 24000
SPEECH_CHANNELS = 1
PCM16_SCALE = 32768.0


@dataclass(frozen=True)
class SpeechAudio:
    """Little-endian 16-bit PCM audio."""

    pcm: bytes
    sample_rate: int = SPEECH_SAMPLE_RATE
    channels: int = SPEECH_CHANNELS

    @property
    def frame_count(self) -> int:
        return len(self.pcm) // (2 * self.channels)

    def samples(self) -> list[list[float]]:
        """Return float samples in [-1, 1) per channel."""
        return decode_pcm16(self.pcm, self.channels)


def decode_pcm16(data: bytes, channels: int = SPEECH_CHANNELS) -> list[list[float]]:
    """Decode interleaved 16-bit PCM into one float list per channel."""
    values = array("h")
    values.frombytes(data[: len(data) - len(data) % 2])
    if sys.byteorder == "big":
        values.byteswap()
    frames = len(values) // channels
    return [
        [values[frame * channels + channel] / PCM16_SCALE for frame in range(frames)]
        for channel in range(channels)
    ]
