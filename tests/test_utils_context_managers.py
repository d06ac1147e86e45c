import logging

import pytest

from snapp_prep.utils.context_managers import timed_stage


def test_timed_stage(caplog):
    stage_seconds = {}
    with caplog.at_level(logging.DEBUG):
        with timed_stage("recode sites", stage_seconds):
            pass

        with timed_stage("cap sites", stage_seconds):
            pass

    assert list(stage_seconds) == ["recode sites", "cap sites"]
    assert all(seconds >= 0 for seconds in stage_seconds.values())
    assert "Stage timing: recode sites:" in caplog.text


def test_timed_stage_records_failed_stage():
    stage_seconds = {}
    with pytest.raises(ValueError):
        with timed_stage("load input", stage_seconds):
            raise ValueError("bad input")

    assert "load input" in stage_seconds
