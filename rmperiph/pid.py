"""Positional PID controller with deadband and clamping."""

from __future__ import annotations

from enum import IntEnum


class PidState(IntEnum):
    """Whether a controller has been configured."""

    DISABLE = 0
    ENABLE = 1


class PidController:
    """PID controller that integrates errors and clamps integral and output."""

    def __init__(self) -> None:
        self.kp = 0.0
        self.ki = 0.0
        self.kd = 0.0
        self.err_dz = 0.0
        self.err_limit = 0.0
        self.i_err_limit = 0.0
        self.output_limit = 0.0
        self.state = PidState.DISABLE
        self.reset()

    def reset(self) -> None:
        """Clear accumulated errors and outputs; gains and limits are kept."""
        self.err = 0.0
        self.d_err = 0.0
        self.i_err = 0.0
        self.output = 0.0
        self.p_output = 0.0
        self.i_output = 0.0
        self.d_output = 0.0

    def configure(
        self,
        kp: float,
        ki: float,
        kd: float,
        i_err_limit: float,
        err_dz: float,
        output_limit: float,
    ) -> None:
        """Set gains and limits, enable the controller and clear its state."""
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.i_err_limit = i_err_limit
        self.err_dz = err_dz
        self.output_limit = output_limit
        self.state = PidState.ENABLE
        self.reset()

    def update(self, err: float) -> float:
        """Feed the current error and return the clamped output."""
        if abs(err) < self.err_dz:
            err = 0.0

        self.i_err += err
        self.d_err = err - self.err
        self.err = err

        if self.i_err > self.i_err_limit:
            self.i_err = self.i_err_limit
        elif self.i_err < -self.i_err_limit:
            self.i_err = -self.i_err_limit

        self.p_output = self.kp * self.err
        self.i_output = self.ki * self.i_err
        self.d_output = self.kd * self.d_err

        self.output = self.p_output + self.i_output + self.d_output
        if self.output > self.output_limit:
            self.output = self.output_limit
        elif self.output < -self.output_limit:
            self.output = -self.output_limit

        return self.output