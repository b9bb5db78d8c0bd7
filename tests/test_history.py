import threading

import pytest

from fuzzytip.history import PlotHistory


def test_add_train_numbers_from_one():
    history = PlotHistory()
    positions = [history.add_train(value) for value in (0.3, 0.2, 0.1)]
    assert positions == [1, 2, 3]
    assert history.index == [1, 2, 3]
    assert history.loss == [0.3, 0.2, 0.1]


def test_add_test_stores_root_error():
    history = PlotHistory()
    error = history.add_test(0.25)
    assert error == pytest.approx(0.5)
    assert history.test_loss == [pytest.approx(0.5)]
    assert history.test_index == [1]


def test_add_test_first_value_sets_min_and_max():
    history = PlotHistory()
    error = history.add_test(0.04)
    assert history.test_error_min == error
    assert history.test_error_max == error


def test_min_and_max_track_extremes():
    history = PlotHistory()
    for value in (0.09, 0.01, 0.49, 0.16):
        history.add_test(value)
    assert history.test_error_min == min(history.test_loss)
    assert history.test_error_max == max(history.test_loss)
    assert history.test_index == [1, 2, 3, 4]


def test_negative_test_loss_rejected():
    history = PlotHistory()
    with pytest.raises(ValueError):
        history.add_test(-1.0)
    assert history.test_loss == []


def test_clear_keeps_test_history():
    history = PlotHistory()
    history.add_train(1.0)
    history.add_test(1.0)
    history.clear()
    assert history.loss == []
    assert history.index == []
    assert history.test_loss == [1.0]


def test_clear_test_keeps_train_history():
    history = PlotHistory()
    history.add_train(2.0)
    history.add_test(1.0)
    history.clear_test()
    assert history.test_loss == []
    assert history.test_index == []
    assert history.test_error_min is None
    assert history.test_error_max is None
    assert history.loss == [2.0]


def test_indices_restart_after_clear():
    history = PlotHistory()
    history.add_train(1.0)
    history.add_train(1.0)
    history.clear()
    assert history.add_train(0.5) == 1


def test_concurrent_adds_keep_lists_aligned():
    history = PlotHistory()

    def worker():
        for _ in range(200):
            history.add_train(0.1)
            history.add_test(0.1)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(history.loss) == 800
    assert history.index == list(range(1, 801))
    assert history.test_index == list(range(1, 801))