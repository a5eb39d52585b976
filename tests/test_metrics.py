import pytest

from wordgrid.metrics import StageTimer


def test_stage_timings_recorded():
    timer = StageTimer()
    with timer.stage("solve"):
        sum(range(1000))
    summary = timer.summary()
    assert set(summary) == {"solve", "total"}
    assert summary["solve"] >= 0
    assert summary["total"] >= summary["solve"]


def test_stage_recorded_when_body_raises():
    timer = StageTimer()
    with pytest.raises(RuntimeError):
        with timer.stage("validate"):
            raise RuntimeError("boom")
    assert "validate" in timer.timings


def test_stage_counts_recorded():
    timer = StageTimer()
    with timer.stage("solve") as counts:
        counts["words"] = 3
        counts["paths"] = 5
    with timer.stage("analytics"):
        pass
    assert timer.counts == {"solve": {"words": 3, "paths": 5}}
    report = timer.report()
    assert report["counts"] == timer.counts
    assert set(report["timings"]) == {"solve", "analytics", "total"}
