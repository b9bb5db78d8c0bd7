import pytest

from fuzzytip.history import PlotHistory
from fuzzytip.plots import plot_losses, plot_memberships
from fuzzytip.rules import FuzzyRule

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_memberships_written_as_png(tmp_path):
    rule = FuzzyRule()
    rule.apply_rules(30.0, 40.0, 0.4)
    target = tmp_path / "fuzzy.png"
    plot_memberships(rule, target)
    assert target.read_bytes()[:8] == PNG_SIGNATURE


def test_memberships_axis_labels(tmp_path):
    rule = FuzzyRule()
    rule.apply_rules(30.0, 40.0, 0.4)
    figure = plot_memberships(rule, tmp_path / "fuzzy.png")
    axes = figure.axes
    assert [ax.get_xlabel() for ax in axes[:3]] == ["Price", "Time", "Quality"]
    assert all(ax.get_ylabel() == "Fuzzy" for ax in axes)
    assert axes[3].get_xlabel().startswith("Singletons ")


def test_memberships_curves_follow_rule(tmp_path):
    rule = FuzzyRule()
    rule.apply_rules(30.0, 40.0, 0.4)
    figure = plot_memberships(rule, tmp_path / "fuzzy.png")
    price_lines = figure.axes[0].get_lines()
    assert list(price_lines[0].get_ydata()) == list(rule.price_curve.high)
    assert list(price_lines[1].get_ydata()) == list(rule.price_curve.mid)
    assert list(price_lines[2].get_ydata()) == list(rule.price_curve.low)
    assert [line.get_color() for line in price_lines[:3]] == ["red", "green", "blue"]


def test_memberships_mark_last_input(tmp_path):
    rule = FuzzyRule()
    rule.apply_rules(30.0, 40.0, 0.4)
    figure = plot_memberships(rule, tmp_path / "fuzzy.png")
    quality_marker = figure.axes[2].get_lines()[3]
    assert list(quality_marker.get_xdata()) == [0.4, 0.4]
    assert list(quality_marker.get_ydata()) == [0.0, 1.0]
    time_marker = figure.axes[1].get_lines()[3]
    assert list(time_marker.get_xdata()) == [40.0, 40.0]


def test_memberships_singleton_stems(tmp_path):
    rule = FuzzyRule()
    rule.apply_rules(30.0, 40.0, 0.4)
    figure = plot_memberships(rule, tmp_path / "fuzzy.png")
    lines = figure.axes[3].get_lines()
    assert len(lines) == len(rule.scores_pos) + 1
    for line, pos, score in zip(lines, rule.scores_pos, rule.scores_show):
        assert list(line.get_xdata()) == [pos, pos]
        assert list(line.get_ydata()) == [0.0, score]


def test_memberships_without_evaluation(tmp_path):
    rule = FuzzyRule()
    figure = plot_memberships(rule, tmp_path / "fuzzy.png")
    assert len(figure.axes[0].get_lines()) == 3
    assert figure.axes[3].get_xlabel() == "Singletons"
    assert figure.axes[3].get_lines() == []


def test_losses_training_only(tmp_path):
    history = PlotHistory()
    for loss in (0.5, 0.25, 0.125):
        history.add_train(loss)
    target = tmp_path / "loss.png"
    figure = plot_losses(history, target)
    assert target.read_bytes()[:8] == PNG_SIGNATURE
    ax = figure.axes[0]
    line = ax.get_lines()[0]
    assert list(line.get_ydata()) == [0.5, 0.25, 0.125]
    assert list(line.get_xdata()) == history.index
    assert ax.get_xlabel() == "Index"
    assert ax.get_ylabel() == "MSE-Loss"


def test_losses_with_test_errors(tmp_path):
    history = PlotHistory()
    history.add_test(0.25)
    history.add_test(0.04)
    figure = plot_losses(history, tmp_path / "loss.png")
    ax = figure.axes[0]
    line = ax.get_lines()[0]
    assert line.get_color() == "green"
    assert list(line.get_ydata()) == history.test_loss
    assert ax.get_xlabel().startswith("Index, Min: ")
    assert "Max: " in ax.get_xlabel()


def test_losses_empty_history_rejected(tmp_path):
    with pytest.raises(ValueError):
        plot_losses(PlotHistory(), tmp_path / "loss.png")
    assert not (tmp_path / "loss.png").exists()