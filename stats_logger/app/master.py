import argparse
import asyncio
import signal
import sys
import time
from pathlib import Path
from typing import Optional

from stats_logger.cli.common import (
    add_logging_arguments,
    add_output_arguments,
    positive_float,
    positive_int,
)
from stats_logger.core import (
    LoggerConfig,
    LoggerSettings,
    SampleAggregator,
    SessionLogger,
    ShutdownCoordinator,
)
from stats_logger.core.logging_config import configure_logging
from stats_logger.core.logging_utils import get_module_logger
from stats_logger.core.paths import DIAGNOSTIC_LOG_FILE, LOGGER_ROOT, ensure_directories


logger = get_module_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Stats Logger - record frame-rate statistics for a simulated session"
    )

    parser.add_argument(
        "--duration",
        type=positive_float,
        default=5.0,
        help="Session length in seconds (default: 5)",
    )
    parser.add_argument(
        "--target-fps",
        type=positive_int,
        default=60,
        help="Frame rate the simulated loop aims for (default: 60)",
    )
    parser.add_argument(
        "--time-scale",
        type=float,
        default=1.0,
        help="Time scale reported with every frame (default: 1.0)",
    )
    parser.add_argument(
        "--update-interval",
        type=positive_float,
        default=0.5,
        help="Seconds between frame-rate samples (default: 0.5)",
    )
    parser.add_argument(
        "--max-samples",
        type=positive_int,
        default=100,
        help="Samples kept for the average and median (default: 100)",
    )
    parser.add_argument(
        "--record-in-editor",
        action="store_true",
        help="Record even when running from source",
    )

    add_output_arguments(parser, default_output=LOGGER_ROOT)
    add_logging_arguments(parser)

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> LoggerConfig:
    return LoggerConfig(
        log_note=args.note,
        include_note_in_file_name=args.note_in_name,
        overwrite_output=args.overwrite,
        output_in_unique_id_folder=args.unique_id_folder,
        include_hardware_info=args.include_hardware_info,
        root_dir=Path(args.output_dir),
    )


async def run_frame_loop(
    aggregator: SampleAggregator,
    *,
    duration: float,
    target_fps: int,
    time_scale: float,
    stop_event: asyncio.Event,
) -> int:
    """Drive ``aggregator`` like a host update loop until done or stopped.

    Returns:
        Number of frames ticked.
    """
    frame_budget = 1.0 / target_fps
    started = last = time.perf_counter()
    frames = 0

    while not stop_event.is_set() and (last - started) < duration:
        await asyncio.sleep(frame_budget)
        now = time.perf_counter()
        sample = aggregator.tick(now - last, time_scale)
        if sample is not None:
            logger.debug("FPS sample: %.2f", sample)
        last = now
        frames += 1

    return frames


async def main(argv: Optional[list[str]] = None) -> int:
    """
    Run one simulated session.

    Shutdown Sequence:
    1. The frame loop finishes, or SIGINT/SIGTERM stops it
    2. ShutdownCoordinator.initiate_shutdown() runs the registered cleanup
    3. The cleanup closes the session log, which collects the FPS summary
       and writes the footer
    """
    args = parse_args(argv)

    ensure_directories()
    configure_logging(
        args.log_level,
        force=True,
        console=args.console_output,
        log_file=DIAGNOSTIC_LOG_FILE,
    )

    settings = LoggerSettings(record_in_editor=args.record_in_editor)
    if not settings.can_record:
        logger.warning("Recording is disabled in the editor; pass --record-in-editor to enable it")
        return 1

    session_logger = SessionLogger(settings)
    log_path = session_logger.open(build_config(args))
    if log_path is None:
        logger.error("Session log could not be opened")
        return 1

    aggregator = SampleAggregator(
        session_logger,
        settings,
        update_interval=args.update_interval,
        max_recorded_samples=args.max_samples,
    )
    aggregator.start()

    shutdown_coordinator = ShutdownCoordinator(name=log_path.name)
    stop_event = asyncio.Event()

    async def close_session_log():
        session_logger.close()
        aggregator.stop()

    shutdown_coordinator.register_cleanup(close_session_log)

    loop = asyncio.get_running_loop()
    handled_signals = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
            handled_signals.append(sig)
        except NotImplementedError:
            pass  # Windows doesn't support add_signal_handler

    try:
        frames = await run_frame_loop(
            aggregator,
            duration=args.duration,
            target_fps=args.target_fps,
            time_scale=args.time_scale,
            stop_event=stop_event,
        )
        await session_logger.append_async(f"Frame loop finished after {frames} frames")
        await shutdown_coordinator.initiate_shutdown("frame loop finished")
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        await shutdown_coordinator.initiate_shutdown("exception")
    finally:
        if not shutdown_coordinator.is_complete:
            await shutdown_coordinator.initiate_shutdown("finally block")
        for sig in handled_signals:
            loop.remove_signal_handler(sig)

    logger.info("Session log written to %s", log_path)
    return 0


def run(argv: Optional[list[str]] = None) -> int:
    try:
        return asyncio.run(main(argv))
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130
    except Exception as exc:  # pragma: no cover - fatal guard
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(run())
