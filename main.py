"""
HoloHand - Gesture-controlled holographic globe

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

logger = logging.getLogger("holohand")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HoloHand - Gesture-controlled holographic globe",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera device id (overrides config)",
    )

    parser.add_argument(
        "--no-preview",
        action="store_true",
        help="Hide the camera preview behind the scene",
    )

    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Start fullscreen",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file",
    )

    return parser.parse_args(argv)


def apply_overrides(config, args):
    """Apply CLI overrides onto the loaded config."""
    if args.camera is not None:
        config.camera.device_id = args.camera
    if args.no_preview:
        config.ui.show_preview = False
    if args.fullscreen:
        config.ui.fullscreen = True
    if args.debug:
        config.logging.level = "DEBUG"
    if args.log_file:
        config.logging.file = args.log_file
    return config


def run(config):
    """Run the vision loop and the render loops on the Qt event loop."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from vision import InteractionStore, LandmarkClassifier
    from vision.hand_tracker import HandTracker
    from vision.worker import VisionLoop
    from ui import HoloWindow, QtFrameScheduler

    app = QApplication(sys.argv)

    store = InteractionStore()
    window = HoloWindow(config, store)

    vision = VisionLoop(
        tracker=HandTracker(config),
        classifier=LandmarkClassifier(config.gestures),
        store=store,
        scheduler=QtFrameScheduler(0, window),
        viewport=window.viewport,
        on_frame=window.set_camera_frame if config.ui.show_preview else None,
    )
    window.viewport_changed.connect(vision.set_viewport)

    cleaned_up = [False]

    def cleanup():
        """Stop all loops and release the camera, once."""
        if cleaned_up[0]:
            return
        cleaned_up[0] = True
        logger.info("Cleaning up...")
        window.shutdown()
        vision.stop()
        logger.info("Cleanup complete")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        logger.info("Received signal %d, shutting down...", signum)
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    window.show_for_config()
    window.start()

    # Rendering keeps going with absent hands if the camera or model fails
    if not vision.start():
        logger.error("Hand tracking unavailable; running without gesture input")

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    from vision import load_config, setup_logging
    config = apply_overrides(load_config(args.config), args)
    setup_logging(config.logging.level, config.logging.file)

    logger.info("HoloHand starting...")
    logger.info("  Camera: %d (%dx%d)", config.camera.device_id,
                config.camera.width, config.camera.height)
    logger.info("  Display: %d fps, preview %s", config.ui.display_fps,
                "on" if config.ui.show_preview else "off")

    return run(config)


if __name__ == "__main__":
    sys.exit(main())
