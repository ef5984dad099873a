import pytest

from glyphgrid.capacity import (
    check_capacity,
    estimate_memory,
    estimate_output_size,
    estimate_processing_time,
)
from glyphgrid.errors import CapacityError
from glyphgrid.planner import GridSpec
from glyphgrid.settings import ConversionSettings


def test_memory_estimate():
    memory = estimate_memory(1024, 1024, GridSpec(1024, 512))
    assert memory.input_mb == pytest.approx(4.0)
    assert memory.output_mb == pytest.approx(1.0)
    assert memory.total_mb == pytest.approx(5.0)


@pytest.mark.parametrize(
    "image, grid, seconds, complexity",
    [
        ((800, 600), GridSpec(100, 50), 2, "low"),
        ((1920, 1080), GridSpec(200, 150), 5, "medium"),
        ((4000, 3000), GridSpec(500, 500), 10, "high"),
    ],
)
def test_time_estimate_tiers(image, grid, seconds, complexity):
    estimate = estimate_processing_time(*image, grid)
    assert estimate.seconds == seconds
    assert estimate.complexity == complexity


def test_reasonable_job_accepted():
    check_capacity(1920, 1080, GridSpec(300, 200))


def test_oversized_source_rejected():
    # 6000 * 5000 * 4 bytes is about 114 MB
    with pytest.raises(CapacityError) as excinfo:
        check_capacity(6000, 5000, GridSpec(100, 100))
    assert "too large" in excinfo.value.reason
    assert "smaller source image" in excinfo.value.suggestion
    assert excinfo.value.reason in str(excinfo.value)


def test_slow_job_rejected(monkeypatch):
    monkeypatch.setattr("glyphgrid.capacity.MAX_SECONDS", 4)
    with pytest.raises(CapacityError) as excinfo:
        check_capacity(1920, 1080, GridSpec(100, 100))
    assert "too long" in excinfo.value.reason
    assert "Reduce the output dimensions" in excinfo.value.suggestion


def test_output_size_estimate():
    settings = ConversionSettings(size="custom", custom_width=100, custom_height=40, color_mode="color")
    assert estimate_output_size(settings) == (4000, 200000)
    plain = ConversionSettings(size="custom", custom_width=100, custom_height=40, color_mode="blackwhite")
    assert estimate_output_size(plain) == (4000, 4000)
