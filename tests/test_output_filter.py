"""
Tests for output filtering
"""

from stepchain.orchestrator import filter_outputs


LOG = {"Step1": ["hello"], "Step2": [1], "Step3": []}


def test_empty_filter_is_identity():
    assert filter_outputs(LOG, []) == LOG


def test_filter_keeps_requested_names():
    assert filter_outputs(LOG, ["Step2"]) == {"Step2": [1]}


def test_filter_unknown_names_get_no_entry():
    """Names that never produced output are absent, not empty"""
    assert filter_outputs(LOG, ["Step2", "Ghost"]) == {"Step2": [1]}
    assert filter_outputs(LOG, ["Ghost"]) == {}


def test_step_with_no_outputs_keeps_empty_entry():
    assert filter_outputs(LOG, ["Step3"]) == {"Step3": []}


def test_filter_is_idempotent():
    """Filtering twice with the same names equals filtering once"""
    once = filter_outputs(LOG, ["Step1", "Step3"])
    assert filter_outputs(once, ["Step1", "Step3"]) == once


def test_filter_does_not_mutate_log():
    log = {"A": [1], "B": [2]}
    filter_outputs(log, ["A"])
    assert log == {"A": [1], "B": [2]}


def test_order_fixes_iteration():
    """Result follows the given order; unlisted names come after"""
    log = {"B": [2], "C": [3], "A": [1]}
    result = filter_outputs(log, [], order=["A", "B"])
    assert list(result) == ["A", "B", "C"]
