"""
Amplification ramp controller.

The effective amplification moves linearly from `init_amp` at `init_amp_time`
to `next_amp` at `next_amp_time`, then stays at `next_amp`. All amp values are
stored multiplied by AMP_PRECISION.

The functional core decides; the host persists whatever state is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from fractions import Fraction

from ..errors import IncorrectAmpError, MaxAmpChangeError, MinAmpChangingTimeError, ValidationError
from ..kernels.python.stableswap_v1 import AMP_PRECISION, MAX_AMP, MAX_AMP_CHANGE, MIN_AMP_CHANGING_TIME
from ..kernels.python.uint import U64_MAX, checked_sub, require_int, require_uint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AmplificationState:
    init_amp: int
    init_amp_time: int
    next_amp: int
    next_amp_time: int

    def __post_init__(self) -> None:
        for name in ("init_amp", "init_amp_time", "next_amp", "next_amp_time"):
            require_int(name, getattr(self, name))
        for name, amp in (("init_amp", self.init_amp), ("next_amp", self.next_amp)):
            if not (0 < amp <= MAX_AMP * AMP_PRECISION):
                raise ValidationError(f"{name} must be in (0, {MAX_AMP * AMP_PRECISION}]: {amp}")
        if self.init_amp_time < 0:
            raise ValidationError(f"init_amp_time must be non-negative: {self.init_amp_time}")
        if self.init_amp_time > self.next_amp_time:
            raise ValidationError(
                f"init_amp_time ({self.init_amp_time}) must not exceed next_amp_time ({self.next_amp_time})"
            )

    @property
    def is_ramping(self) -> bool:
        return self.init_amp != self.next_amp or self.init_amp_time != self.next_amp_time


def init_amp_state(amp: int, now: int) -> AmplificationState:
    """Amplification state for a freshly created pool (no ramp in progress)."""
    require_int("amp", amp)
    require_uint("now", now, U64_MAX)
    if amp == 0 or amp > MAX_AMP:
        raise IncorrectAmpError(MAX_AMP)
    return AmplificationState(
        init_amp=amp * AMP_PRECISION,
        init_amp_time=now,
        next_amp=amp * AMP_PRECISION,
        next_amp_time=now,
    )


def current_amp(state: AmplificationState, now: int) -> int:
    """Effective amplification (AMP_PRECISION-scaled) at time `now`."""
    require_uint("now", now, U64_MAX)
    if now >= state.next_amp_time:
        return state.next_amp

    elapsed_time = checked_sub(now, state.init_amp_time, what="elapsed ramp time")
    time_range = state.next_amp_time - state.init_amp_time

    # Unsigned arithmetic in the ramp direction.
    if state.next_amp > state.init_amp:
        amp_range = state.next_amp - state.init_amp
        return state.init_amp + amp_range * elapsed_time // time_range
    amp_range = state.init_amp - state.next_amp
    return state.init_amp - amp_range * elapsed_time // time_range


def start_ramp(state: AmplificationState, now: int, target_amp: int, target_time: int) -> AmplificationState:
    """
    Start ramping towards `target_amp` (raw, not scaled), reached at `target_time`.

    Fails if:
    - target_amp is zero or above MAX_AMP,
    - the target differs from the current amp by more than MAX_AMP_CHANGE times,
    - the previous ramp started less than MIN_AMP_CHANGING_TIME ago,
    - target_time is less than MIN_AMP_CHANGING_TIME away.
    """
    require_int("target_amp", target_amp)
    require_uint("target_time", target_time, U64_MAX)
    if target_amp == 0 or target_amp > MAX_AMP:
        raise IncorrectAmpError(MAX_AMP)

    amp = current_amp(state, now)
    target_amp_with_precision = target_amp * AMP_PRECISION

    if target_amp_with_precision * MAX_AMP_CHANGE < amp or target_amp_with_precision > amp * MAX_AMP_CHANGE:
        raise MaxAmpChangeError(MAX_AMP_CHANGE)

    if now < state.init_amp_time + MIN_AMP_CHANGING_TIME or target_time < now + MIN_AMP_CHANGING_TIME:
        raise MinAmpChangingTimeError(MIN_AMP_CHANGING_TIME)

    logger.info("amp ramp started: %d -> %d (t=%d -> %d)", amp, target_amp_with_precision, now, target_time)
    return AmplificationState(
        init_amp=amp,
        init_amp_time=now,
        next_amp=target_amp_with_precision,
        next_amp_time=target_time,
    )


def stop_ramp(state: AmplificationState, now: int) -> AmplificationState:
    """Freeze the amplification at its current value."""
    amp = current_amp(state, now)
    if state.is_ramping:
        logger.info("amp ramp stopped at %d (t=%d)", amp, now)
    else:
        logger.debug("amp already fixed at %d (t=%d)", amp, now)
    return replace(state, init_amp=amp, next_amp=amp, init_amp_time=now, next_amp_time=now)


def amp_as_fraction(amp: int) -> Fraction:
    """Human-scale amplification, e.g. 5000 -> 50."""
    return Fraction(amp, AMP_PRECISION)
