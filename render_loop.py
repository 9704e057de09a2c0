"""
Frame step — Layer 2
One call per displayed frame: spin the chalk, update the orbit controls, render.
"""

from typing import Callable, Iterable, Optional

from orbit import OrbitControls


class RenderLoop:
    """Per-frame step over a composed scene. Exceptions propagate to the host."""

    def __init__(self, spinner, controls: OrbitControls,
                 render: Optional[Callable[[], None]] = None):
        self.spinner = spinner      # node whose rotation[1] follows time
        self.controls = controls
        self.render = render
        self.frames = 0
        self.time = 0.0             # seconds, last frame

    def frame(self, time_ms: float) -> None:
        """Frame timestamps are in milliseconds since start."""
        t = time_ms * 0.001
        self.time = t
        self.spinner.rotation[1] = t
        self.controls.update()
        if self.render is not None:
            self.render()
        self.frames += 1

    def run(self, timestamps: Iterable[float]) -> None:
        """Drive frames from a stream of host timestamps; ends with the stream."""
        for time_ms in timestamps:
            self.frame(time_ms)
