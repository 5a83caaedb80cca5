import logging

import numpy as np

from geoprims import closest
from geoprims.logging_utils import _safe_repr, debug_log_call


def test_safe_repr_summarizes_large_arrays():
    assert _safe_repr(np.array([1.0, 2.0])) == "array([1.0, 2.0])"
    assert _safe_repr(np.zeros(10)) == "array(shape=(10,), min=0, max=0)"
    assert _safe_repr((1, 2, 3, 4, 5, 6, 7)) == "(1, 2, 3, 4, 5, ...)"


def test_public_queries_trace_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="geoprims.closest"):
        closest.point_segment((1, 2), (0, 0), (4, 0))
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Entering point_segment") for message in messages)
    assert any(message.startswith("Exiting point_segment") for message in messages)


def test_tracing_is_silent_above_debug(caplog):
    with caplog.at_level(logging.INFO, logger="geoprims.closest"):
        closest.point_segment((1, 2), (0, 0), (4, 0))
    assert not caplog.records


def test_debug_log_call_wraps_once():
    logger = logging.getLogger("geoprims.tests")

    def _double(x):
        return 2 * x

    wrapped = debug_log_call(logger)(_double)
    assert debug_log_call(logger)(wrapped) is wrapped
    assert wrapped(4) == 8
