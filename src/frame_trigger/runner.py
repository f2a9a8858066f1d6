"""
Frame Trigger - main watch loop.

Pulls frames one at a time, runs every enabled event through the pipeline and
hands rising edges to the action worker. Only frame reads block this loop;
actions run on the worker thread.
"""

import logging
import time
from dataclasses import dataclass
from threading import Event

from .actions import ActionDispatcher, ActionWorker, QueuePolicy
from .capture import FrameSource
from .config import Config
from .counter import RateCounter
from .debounce import EdgeDebouncer
from .detection import Detector, ReferenceImage
from .display import DebugWindow, format_rate
from .errors import FrameSourceError
from .pipeline import Pipeline, WatchedEvent

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    """Summary of one watch run."""

    frames: int = 0
    events_fired: int = 0
    actions_executed: int = 0
    actions_failed: int = 0
    actions_dropped: int = 0
    elapsed: float = 0.0
    reason: str = ""


def build_watched_events(config: Config) -> list[WatchedEvent]:
    """
    Create detectors, references and debouncers for every enabled event.

    Raises:
        ReferenceLoadError: If a reference image cannot be loaded
    """
    watched = []
    for event_config in config.enabled_events:
        spec = event_config.detector_spec()
        reference_path = config.resolve_path(event_config.reference_path())
        reference = ReferenceImage.from_file(reference_path, spec.channel, spec.cutoff)

        detector_name = (
            event_config.detector
            if isinstance(event_config.detector, str)
            else f"{event_config.name}-inline"
        )
        watched.append(
            WatchedEvent(
                name=event_config.name,
                detector=Detector(detector_name, spec, reference),
                debouncer=EdgeDebouncer(
                    cooldown=event_config.cooldown_seconds,
                    refresh_on_true=event_config.refresh_on_true,
                ),
                action=event_config.action,
            )
        )

        action = event_config.action.describe() if event_config.action else "no action"
        logger.info(f"Watching {event_config.name}: {detector_name} -> {action}")

    return watched


def build_worker(config: Config, dispatcher: ActionDispatcher | None = None) -> ActionWorker:
    """Create the action worker from the dispatch settings."""
    return ActionWorker(
        dispatcher or ActionDispatcher(),
        queue_size=config.dispatch.queue_size,
        policy=QueuePolicy(config.dispatch.when_full),
        block_timeout=config.dispatch.block_timeout,
    )


def run_watch(
    config: Config,
    shutdown_event: Event | None = None,
    source: FrameSource | None = None,
    worker: ActionWorker | None = None,
    window: DebugWindow | None = None,
) -> RunStats:
    """
    Run the watch loop until shutdown, q in the debug window, or source failure.

    Args:
        config: Validated configuration
        shutdown_event: Set to stop the loop after the current frame
        source: Frame source (built from config if omitted)
        worker: Action worker (built from config if omitted)
        window: Debug window (built when config.debug_window is set)

    Returns:
        Statistics for the run

    Raises:
        ReferenceLoadError: If a reference image is missing at startup
        FrameSourceError: If the frame source fails permanently
    """
    watched = build_watched_events(config)
    if not watched:
        logger.warning("No enabled events - frames will be read but nothing fires")

    if source is None:
        source = FrameSource(
            config.camera.source,
            max_reconnect_attempts=config.camera.max_reconnect_attempts,
            reconnect_delay=config.camera.reconnect_delay,
        )
    if worker is None:
        worker = build_worker(config)
    if window is None and config.debug_window:
        window = DebugWindow()

    pipeline = Pipeline(watched, worker)
    stats = RunStats()
    start_time = time.monotonic()

    worker.start()
    try:
        source.open()
        # Seed after open so reconnect backoff is not part of the first span
        rate_counter = RateCounter(max_span=config.runtime.rate_window_seconds)
        logger.info("Watch started")
        stats.reason = _watch_loop(
            source, pipeline, rate_counter, config, stats, shutdown_event, window
        )
    except KeyboardInterrupt:
        stats.reason = "interrupted"
        logger.info("Watch stopped by user")
    except FrameSourceError as e:
        stats.reason = "source_failed"
        logger.error(f"Frame source failed: {e}")
        raise
    finally:
        source.release()
        if window is not None:
            window.close()
        worker.stop(timeout=config.dispatch.shutdown_timeout)

        stats.elapsed = time.monotonic() - start_time
        stats.events_fired = sum(event.fired_count for event in watched)
        stats.actions_executed = worker.executed
        stats.actions_failed = worker.failed
        stats.actions_dropped = worker.dropped
        _log_final_stats(stats)

    return stats


def _watch_loop(
    source: FrameSource,
    pipeline: Pipeline,
    rate_counter: RateCounter,
    config: Config,
    stats: RunStats,
    shutdown_event: Event | None,
    window: DebugWindow | None,
) -> str:
    """Frame loop. Returns the reason it stopped."""
    while True:
        if shutdown_event is not None and shutdown_event.is_set():
            logger.info("Shutdown signal received")
            return "signal"

        frame = source.read()
        now = time.monotonic()
        stats.frames += 1
        rate_counter.feed(now)

        pipeline.process_frame(frame, now)

        if window is not None and window.show(frame, format_rate(rate_counter.rate())):
            logger.info("Quit requested from debug window")
            return "quit"

        if stats.frames % config.runtime.status_interval == 0:
            _log_status(stats, rate_counter, pipeline)


def _log_status(stats: RunStats, rate_counter: RateCounter, pipeline: Pipeline) -> None:
    """Log periodic status."""
    fired = sum(event.fired_count for event in pipeline.events)
    logger.info(
        f"Frame {stats.frames} | {format_rate(rate_counter.rate())} | "
        f"Events: {fired} | Queued actions: {pipeline.worker.submitted}"
    )


def _log_final_stats(stats: RunStats) -> None:
    """Log final statistics."""
    logger.info("Watch complete")
    logger.info(f"Runtime: {stats.elapsed / 60:.1f} minutes")
    logger.info(f"Frames: {stats.frames}")
    logger.info(f"Events: {stats.events_fired}")
    logger.info(
        f"Actions: {stats.actions_executed} ok, {stats.actions_failed} failed, "
        f"{stats.actions_dropped} dropped"
    )
