"""
Renderer module - drives per-pixel sampling across image rows.

Implements:
- Row-parallel rendering on a thread pool
- Antialiasing with per-row random jitter (private generator per row task)
- Gamma-correct 8-bit output
- Cooperative cancellation via a threading.Event
"""

from __future__ import annotations
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence
import numpy as np

from .camera import Camera
from .lights import PointLight
from .options import RenderOptions
from .scene import build_cornell_room
from .shapes import Hittable
from .tonemapping import to_srgb8
from .tracer import trace_ray, AMBIENT_IOR


class RenderCancelledError(Exception):
    """Raised when a render is cancelled before it finished."""
    pass


class Renderer:
    """Row-parallel ray tracing renderer."""

    def __init__(self, num_threads: int = 0):
        """Create a renderer.

        Args:
            num_threads: Worker threads (0 = auto-detect, 1 = render serially)
        """
        self.num_threads = num_threads if num_threads > 0 else (os.cpu_count() or 4)
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(
        self,
        options: RenderOptions,
        cancel_event: Optional[threading.Event] = None
    ) -> np.ndarray:
        """Render the Cornell room described by the options.

        Args:
            options: Render options (image size, sampling, scene toggles)
            cancel_event: Set to request cancellation

        Returns:
            RGB image as a uint8 array of shape (height, width, 3)

        Raises:
            RenderCancelledError: If cancellation was requested
        """
        if cancel_event is not None and cancel_event.is_set():
            raise RenderCancelledError("Render cancelled before it started")

        scene = build_cornell_room(options)
        return self.render_scene(
            scene.world,
            scene.lights,
            scene.camera,
            options.width,
            options.height,
            options.samples_per_pixel,
            options.max_depth,
            cancel_event
        )

    def render_scene(
        self,
        world: Hittable,
        lights: Sequence[PointLight],
        camera: Camera,
        width: int,
        height: int,
        samples_per_pixel: int = 1,
        max_depth: int = 4,
        cancel_event: Optional[threading.Event] = None
    ) -> np.ndarray:
        """Render an arbitrary scene.

        Rows are independent units of work. Each row task owns its random
        generator and writes only its own row of the output buffer.
        """
        if cancel_event is None:
            cancel_event = threading.Event()
        if cancel_event.is_set():
            raise RenderCancelledError("Render cancelled before it started")

        samples = max(1, samples_per_pixel)
        depth = max(1, max_depth)

        image = np.zeros((height, width, 3), dtype=np.uint8)
        # With one sample every pixel is sampled at its center
        center_jitter = np.full((1, 2), 0.5)
        completed_rows = [0]
        progress_lock = threading.Lock()

        def render_row(y: int) -> bool:
            """Render a single row. Returns False if skipped by cancellation."""
            if cancel_event.is_set():
                return False

            rng = np.random.default_rng()
            row = np.zeros((width, 3), dtype=np.float64)

            for x in range(width):
                if samples == 1:
                    jitter = center_jitter
                else:
                    jitter = rng.random((samples, 2))

                pixel = np.zeros(3, dtype=np.float64)
                for jx, jy in jitter:
                    u = (x + jx) / width
                    v = 1.0 - (y + jy) / height
                    ray = camera.get_ray(u, v)
                    pixel += trace_ray(ray, world, lights, depth, AMBIENT_IOR).to_array()

                row[x] = pixel / samples

            image[y] = to_srgb8(row)

            if self._progress_callback:
                with progress_lock:
                    completed_rows[0] += 1
                    self._progress_callback(completed_rows[0] / height)
            return True

        if self.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.num_threads) as executor:
                try:
                    results = list(executor.map(render_row, range(height)))
                except KeyboardInterrupt:
                    # Rows still queued see the event and return immediately
                    cancel_event.set()
                    raise
        else:
            results = [render_row(y) for y in range(height)]

        if cancel_event.is_set() or not all(results):
            raise RenderCancelledError("Render cancelled")

        return image


def render(
    options: RenderOptions,
    cancel_event: Optional[threading.Event] = None,
    num_threads: int = 0
) -> np.ndarray:
    """Render the Cornell room with a default renderer.

    Args:
        options: Render options
        cancel_event: Set to request cancellation
        num_threads: Worker threads (0 = auto-detect)

    Returns:
        RGB image as a uint8 array of shape (height, width, 3)
    """
    return Renderer(num_threads).render(options, cancel_event)


def save_image(image: np.ndarray, filename: str) -> None:
    """Save an 8-bit RGB image to file.

    Args:
        image: uint8 array of shape (height, width, 3)
        filename: Output filename (extension determines format)
    """
    from PIL import Image as PILImage

    pil_image = PILImage.fromarray(image, 'RGB')
    pil_image.save(filename)
