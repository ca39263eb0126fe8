"""Pipeline driver - runs detection cycles against an audio source.

One cycle pulls a raw block, normalizes it, runs YIN, maps the frequency to
a note and publishes a status string. Cycles run strictly one after another
at a fixed cadence, either on the calling thread (:meth:`PipelineDriver.run`)
or on a background thread (:meth:`PipelineDriver.start`).
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..analysis import NoteMapper, PitchEstimate, YinPitchDetector
from ..core import Note, TunerConfig
from ..core.constants import UNKNOWN_STATUS
from ..core.errors import EndOfStream
from ..input import normalize

logger = logging.getLogger(__name__)

PullBlock = Callable[[np.ndarray], None]
PublishStatus = Callable[[str], None]


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one detection cycle."""

    status: str
    frequency: float
    estimate: PitchEstimate
    note: Optional[Note] = None
    elapsed: float = 0.0  # Seconds spent normalizing and detecting

    @property
    def reliable(self) -> bool:
        return self.note is not None


def format_status(note: Optional[Note], frequency: float) -> str:
    """Render '<note>: <frequency>' or the unknown marker."""
    if note is None:
        return UNKNOWN_STATUS
    return f"{note.name}: {frequency:.2f}"


class PipelineDriver:
    """Orchestrates normalize -> detect -> map -> publish cycles.

    The raw block, waveform and difference buffer are allocated once here
    and handed to each stage, so a cycle allocates nothing large.
    """

    def __init__(
        self,
        pull_block: PullBlock,
        publish_status: PublishStatus,
        config: Optional[TunerConfig] = None,
    ):
        """
        Initialize PipelineDriver.

        Args:
            pull_block: Blocking call that fills a raw block in place
            publish_status: Receives one status string per cycle
            config: Tuner configuration (validated here)

        Raises:
            ConfigError: If the configuration is unusable
        """
        self.config = (config or TunerConfig()).validate()
        self.pull_block = pull_block
        self.publish_status = publish_status

        self.encoding = self.config.encoding
        self.detector = YinPitchDetector(
            self.config.sample_rate,
            self.config.detection_length,
            threshold=self.config.threshold,
            method=self.config.difference_method,
        )
        self.mapper = NoteMapper(self.config.reference_pitch)

        self.raw_block = np.zeros(self.config.capture_length, dtype=self.encoding.dtype)
        self.waveform = np.zeros(self.config.capture_length, dtype=np.float64)
        self.difference_buffer = self.detector.new_buffer()

        self.last_result: Optional[CycleResult] = None
        self.cycles = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def process(self, raw_block: np.ndarray) -> CycleResult:
        """
        Turn one raw block into a status, without any I/O.

        Args:
            raw_block: Raw PCM samples, ``capture_length`` long

        Returns:
            CycleResult for the block
        """
        started = time.perf_counter()
        normalize(raw_block, self.encoding, out=self.waveform)
        estimate = self.detector.estimate(self.waveform, self.difference_buffer)
        frequency = estimate.frequency

        # The detector always answers; silence and noise are rejected here
        note = None
        if estimate.is_reliable(self.config.min_frequency):
            note = self.mapper.map_to_note(frequency)

        return CycleResult(
            status=format_status(note, frequency),
            frequency=frequency,
            estimate=estimate,
            note=note,
            elapsed=time.perf_counter() - started,
        )

    def run_cycle(self) -> CycleResult:
        """Pull, process and publish one block."""
        self.pull_block(self.raw_block)
        result = self.process(self.raw_block)
        logger.debug("YIN result %s (%.2f Hz, tau=%.2f)", result.status,
                     result.frequency, result.estimate.refined_tau)

        self.publish_status(result.status)
        self.last_result = result
        self.cycles += 1
        return result

    def run(self, max_cycles: Optional[int] = None) -> int:
        """
        Run cycles on the current thread until stopped.

        Stops when :meth:`stop` is called, after ``max_cycles`` cycles, or
        when the source raises EndOfStream. Other source errors propagate.

        Returns:
            Number of cycles completed
        """
        interval = self.config.cadence_seconds
        completed = 0
        next_tick = time.monotonic()

        while not self._stop.is_set():
            if max_cycles is not None and completed >= max_cycles:
                break
            try:
                self.run_cycle()
            except EndOfStream:
                logger.info("Audio source exhausted after %d cycles", completed)
                break
            completed += 1

            next_tick += interval
            delay = next_tick - time.monotonic()
            if delay > 0:
                self._stop.wait(delay)
            else:
                if interval > 0:
                    logger.warning(
                        "Detection cycle overran the %d ms cadence by %.1f ms; "
                        "consider a shorter detection_length",
                        self.config.cadence_ms,
                        -delay * 1000,
                    )
                next_tick = time.monotonic()

        return completed

    def start(self) -> threading.Thread:
        """Run the cycle loop on a background thread."""
        if self.running:
            raise RuntimeError("Pipeline is already running")

        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run_background, name="tuner-detection", daemon=True
        )
        self._thread.start()
        logger.info("Detection started (%d ms cadence)", self.config.cadence_ms)
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        """Ask the loop to finish its current cycle and wait for it.

        If ``timeout`` expires first the thread is kept, so :attr:`running`
        stays True and :meth:`start` refuses until the cycle has finished.
        """
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        if thread is not None and thread.is_alive():
            logger.warning("Detection thread still finishing its cycle after stop")
            return
        self._thread = None
        logger.info("Detection stopped after %d cycles", self.cycles)

    def _run_background(self) -> None:
        try:
            self.run()
        except Exception:
            logger.exception("Detection loop failed")
            raise
