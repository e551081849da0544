import math

import pytest

from gestures import EventKind, HandPose


def from_down(angle):
    """Unit vector at `angle` degrees from down, tilted toward +z."""
    r = math.radians(angle)
    return (0.0, -math.cos(r), math.sin(r))


def from_up(angle):
    """Unit vector at `angle` degrees from up, tilted toward +x."""
    r = math.radians(angle)
    return (math.sin(r), math.cos(r), 0.0)


def make_pose(palm=None, finger=None, arm=None, extended=(True,) * 5, tracked=True):
    return HandPose(
        palm_normal=palm if palm is not None else from_down(0),
        finger_direction=finger if finger is not None else from_up(0),
        arm_direction=arm if arm is not None else from_up(0),
        fingers_extended=tuple(extended),
        tracked=tracked,
    )


class EventLog:
    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def kinds(self):
        return [e.kind for e in self.events]

    def count(self, kind):
        return sum(1 for e in self.events if e.kind is kind)

    @property
    def activations(self):
        return self.count(EventKind.ACTIVATED)

    @property
    def deactivations(self):
        return self.count(EventKind.DEACTIVATED)


@pytest.fixture
def events():
    return EventLog()
