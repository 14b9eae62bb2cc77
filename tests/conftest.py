"""Pytest 配置"""

import pytest

from splitdeck.layout import Direction, Leaf, Split
from splitdeck.telemetry import metrics


@pytest.fixture(autouse=True)
def reset_metrics():
    """每次测试前重置指标"""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def pair():
    """Split(h, [s1, s2])"""
    return Split(Direction.HORIZONTAL, 0.5, (Leaf("s1"), Leaf("s2")))


@pytest.fixture
def nested():
    """Split(h, [s1, Split(v, [s2, s3])])"""
    return Split(
        Direction.HORIZONTAL,
        0.4,
        (Leaf("s1"), Split(Direction.VERTICAL, 0.7, (Leaf("s2"), Leaf("s3")))),
    )
