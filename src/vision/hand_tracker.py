"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Handles camera capture and hand landmark detection.
"""
import logging
import time
from pathlib import Path
from typing import List, Optional

import cv2
import mediapipe as mp
import numpy as np

from .config import Config, CameraConfig, MediaPipeConfig
from .landmark_classifier import NUM_LANDMARKS, DetectedHand

logger = logging.getLogger(__name__)

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = ("https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
             "hand_landmarker/float16/1/hand_landmarker.task")

# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]

SKELETON_COLOR = (255, 255, 0)  # BGR cyan
JOINT_COLOR = (255, 255, 255)


class HandTracker:
    """
    Camera capture plus MediaPipe HandLandmarker in VIDEO mode.

    Frames are handed to the detector unflipped; mirroring happens on the
    classified coordinates instead.
    """

    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        if model_path is None and self._mp_config.model_path:
            model_path = Path(self._mp_config.model_path)
        self._model_path = Path(model_path or self.DEFAULT_MODEL_PATH)

        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._frame_count = 0
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Start MediaPipe and camera capture.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            logger.error("Model file not found: %s (download from %s)",
                         self._model_path, MODEL_URL)
            return False

        try:
            self._landmarker = self._create_landmarker()
        except Exception:
            logger.exception("Could not create hand landmarker")
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            logger.error("Could not open camera %d", self._camera_config.device_id)
            self.stop()
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        logger.info("Camera %d started (%dx%d @ %d fps)",
                    self._camera_config.device_id, self._camera_config.width,
                    self._camera_config.height, self._camera_config.fps)
        return True

    def _create_landmarker(self) -> HandLandmarker:
        """Build the landmarker, preferring the GPU delegate with CPU fallback."""
        base_opts = BaseOptions(model_asset_path=str(self._model_path))

        def options(base):
            return HandLandmarkerOptions(
                base_options=base,
                running_mode=VisionRunningMode.VIDEO,
                num_hands=self._mp_config.num_hands,
                min_hand_detection_confidence=self._mp_config.min_detection_confidence,
                min_tracking_confidence=self._mp_config.min_tracking_confidence,
            )

        if self._mp_config.use_gpu:
            try:
                gpu_opts = BaseOptions(
                    model_asset_path=str(self._model_path),
                    delegate=BaseOptions.Delegate.GPU,
                )
                landmarker = HandLandmarker.create_from_options(options(gpu_opts))
                logger.info("GPU delegate enabled for MediaPipe")
                return landmarker
            except (AttributeError, RuntimeError) as e:
                logger.warning("GPU delegate failed: %s, using CPU", e)

        return HandLandmarker.create_from_options(options(base_opts))

    def stop(self) -> None:
        """Stop camera capture and release resources. Safe to call twice."""
        was_running = self._is_running
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None
            if was_running:
                logger.info("Camera released after %d frames", self._frame_count)

        self._last_frame = None

    def read_frame(self) -> Optional[np.ndarray]:
        """Read the next camera frame (BGR), or None if none is available."""
        if not self._is_running or self._cap is None:
            return None

        ret, frame = self._cap.read()
        if not ret:
            return None

        self._frame_count += 1
        self._last_frame = frame
        return frame

    def _next_timestamp_ms(self) -> int:
        """Strictly monotonic timestamp required by VIDEO mode."""
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms
        return timestamp_ms

    def detect(self, frame: np.ndarray) -> List[DetectedHand]:
        """Run the landmarker on one BGR frame."""
        if self._landmarker is None:
            return []

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        result = self._landmarker.detect_for_video(mp_image, self._next_timestamp_ms())

        if not result.hand_landmarks:
            return []

        hands = []
        for i, hand_landmarks in enumerate(result.hand_landmarks):
            categories = result.handedness[i] if i < len(result.handedness) else []
            label = categories[0].category_name if categories else "Unknown"
            score = categories[0].score if categories else 0.0
            hands.append(DetectedHand(
                keypoints=[(lm.x, lm.y, lm.z) for lm in hand_landmarks],
                handedness=label,
                score=score,
            ))
        return hands

    def get_frame_with_landmarks(self, hands: Optional[List[DetectedHand]] = None) -> Optional[np.ndarray]:
        """
        Last frame with hand skeletons drawn, mirrored for display.

        Returns:
            BGR frame, or None if no frame has been read yet.
        """
        if self._last_frame is None:
            return None

        frame = self._last_frame.copy()
        h, w = frame.shape[:2]

        for hand in hands or []:
            try:
                points = [(int(p[0] * w), int(p[1] * h)) for p in hand.keypoints]
            except (IndexError, TypeError, ValueError, OverflowError):
                continue
            if len(points) < NUM_LANDMARKS:
                continue
            for start_idx, end_idx in HAND_CONNECTIONS:
                cv2.line(frame, points[start_idx], points[end_idx], SKELETON_COLOR, 2)
            for point in points:
                cv2.circle(frame, point, 4, JOINT_COLOR, -1)
                cv2.circle(frame, point, 4, SKELETON_COLOR, 1)

        return cv2.flip(frame, 1)
