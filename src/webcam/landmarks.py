"""
Hand landmark container shared by the tracker and the pose sensor.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

Point3 = Tuple[float, float, float]


@dataclass
class HandLandmarks:
    """
    Hand landmarks from MediaPipe.

    Attributes:
        landmarks: List of 21 (x, y, z) tuples, normalized 0-1 image coords
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
        world_landmarks: Optional 21 (x, y, z) tuples in meters, origin at
                         the hand's geometric center
    """
    landmarks: List[Point3]
    handedness: str
    confidence: float
    world_landmarks: Optional[List[Point3]] = None

    # MediaPipe landmark indices
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    @property
    def points(self) -> List[Point3]:
        """World landmarks when available, image landmarks otherwise."""
        return self.world_landmarks if self.world_landmarks else self.landmarks

    def get(self, index: int) -> Point3:
        return self.points[index]


# Same as MediaPipe's HAND_CONNECTIONS
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]
