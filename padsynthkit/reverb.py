"""Stereo reverberator built from parallel comb and serial all-pass filters."""

from __future__ import annotations

from collections.abc import MutableSequence

_SMALLEST_NORMAL = 1.1754943508222875e-38

COMB_TUNINGS = (1116, 1188, 1277, 1356, 1422, 1491, 1557, 1617, 1685, 1748)
ALLPASS_TUNINGS = (556, 441, 341, 225, 180, 153)
STEREO_SPREAD = 23
INPUT_GAIN = 0.05


def denormal(value: float) -> float:
    """Flush values that would be single-precision subnormals to zero."""
    return 0.0 if abs(value) < _SMALLEST_NORMAL else value


class SampleBuffer:
    """Circular delay line that only ever grows."""

    def __init__(self, size: int = 0) -> None:
        self.buffer: list[float] = []
        self.index = 0
        self.resize(size)

    @property
    def size(self) -> int:
        return len(self.buffer)

    def reset(self) -> None:
        self.buffer = [0.0] * len(self.buffer)
        self.index = 0

    def resize(self, size: int) -> None:
        size = max(1, int(size))
        if size > len(self.buffer):
            self.buffer.extend([0.0] * (size - len(self.buffer)))

    def tick(self) -> int:
        """Return the current position in the line and advance it."""
        position = self.index
        self.index += 1
        if self.index >= len(self.buffer):
            self.index = 0
        return position


class CombFilter(SampleBuffer):
    """Lowpass-feedback comb filter."""

    def __init__(self, size: int = 0) -> None:
        super().__init__(size)
        self.feedb = 0.5
        self.damp = 0.5
        self._out = 0.0

    def reset(self) -> None:
        super().reset()
        self._out = 0.0

    def output(self, value: float) -> float:
        position = self.tick()
        out = self.buffer[position]
        self._out = denormal(out * (1.0 - self.damp) + self._out * self.damp)
        self.buffer[position] = value + self._out * self.feedb
        return out


class AllpassFilter(SampleBuffer):
    """Schroeder all-pass filter."""

    def __init__(self, size: int = 0) -> None:
        super().__init__(size)
        self.feedb = 0.5

    def output(self, value: float) -> float:
        position = self.tick()
        out = self.buffer[position]
        self.buffer[position] = denormal(value + out * self.feedb)
        return out - value


class Reverb:
    """Stereo reverb processing sample blocks in place."""

    def __init__(self, sample_rate: float = 44100.0) -> None:
        self.sample_rate = sample_rate
        self.room = 0.5
        self.damp = 0.5
        self.feedb = 0.5
        self.combs_left = [CombFilter() for _ in COMB_TUNINGS]
        self.combs_right = [CombFilter() for _ in COMB_TUNINGS]
        self.allpasses_left = [AllpassFilter() for _ in ALLPASS_TUNINGS]
        self.allpasses_right = [AllpassFilter() for _ in ALLPASS_TUNINGS]
        self.reset()

    def reset(self) -> None:
        ratio = self.sample_rate / 44100.0
        pairs = (
            (ALLPASS_TUNINGS, self.allpasses_left, self.allpasses_right),
            (COMB_TUNINGS, self.combs_left, self.combs_right),
        )
        for tunings, lefts, rights in pairs:
            for tuning, left, right in zip(tunings, lefts, rights):
                left.resize(int(tuning * ratio))
                left.reset()
                right.resize(int((tuning + STEREO_SPREAD) * ratio))
                right.reset()
        self._apply_feedb()
        self._apply_room()
        self._apply_damp()

    def _apply_room(self) -> None:
        for comb in (*self.combs_left, *self.combs_right):
            comb.feedb = self.room

    def _apply_damp(self) -> None:
        damp2 = self.damp * self.damp
        for comb in (*self.combs_left, *self.combs_right):
            comb.damp = damp2

    def _apply_feedb(self) -> None:
        feedb2 = 2.0 * self.feedb * (2.0 - self.feedb) / 3.0
        for allpass in (*self.allpasses_left, *self.allpasses_right):
            allpass.feedb = feedb2

    def process(
        self,
        left: MutableSequence[float],
        right: MutableSequence[float],
        wet: float,
        feedb: float,
        room: float,
        damp: float,
        width: float,
    ) -> None:
        """Add the wet reverb signal to both channels, in place."""
        if len(left) != len(right):
            raise ValueError("left and right channels differ in length")
        if wet < 1e-9:
            return
        if self.feedb != feedb:
            self.feedb = feedb
            self._apply_feedb()
        if self.room != room:
            self.room = room
            self._apply_room()
        if self.damp != damp:
            self.damp = damp
            self._apply_damp()

        for i, (in0, in1) in enumerate(zip(left, right)):
            out0 = in0 * INPUT_GAIN
            out1 = in1 * INPUT_GAIN
            tmp0 = sum(comb.output(out0) for comb in self.combs_left)
            tmp1 = sum(comb.output(out1) for comb in self.combs_right)
            for allpass0, allpass1 in zip(self.allpasses_left, self.allpasses_right):
                tmp0 = allpass0.output(tmp0)
                tmp1 = allpass1.output(tmp1)
            if width < 0.0:
                out0 = tmp0 * (1.0 + width) - tmp1 * width
                out1 = tmp1 * (1.0 + width) - tmp0 * width
            else:
                out0 = tmp0 * width + tmp1 * (1.0 - width)
                out1 = tmp1 * width + tmp0 * (1.0 - width)
            left[i] = in0 + wet * out0
            right[i] = in1 + wet * out1