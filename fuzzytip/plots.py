"""Static charts of the fuzzy memberships and of the loss histories."""

from __future__ import annotations

from os import PathLike

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from fuzzytip.history import PlotHistory
from fuzzytip.rules import FuzzyRule, MembershipCurve


def _new_figure(width: float, height: float) -> Figure:
    figure = Figure(figsize=(width, height))
    FigureCanvasAgg(figure)
    return figure


def _draw_curve(ax, curve: MembershipCurve, label: str, last: float | None) -> None:
    ax.plot(curve.x, curve.high, color="red", label="High")
    ax.plot(curve.x, curve.mid, color="green", label="Mid")
    ax.plot(curve.x, curve.low, color="blue", label="Low")
    if last is not None:
        ax.plot([last, last], [0.0, 1.0], color="magenta", linewidth=2.0)
    ax.set_xlabel(label)
    ax.set_ylabel("Fuzzy")
    ax.legend(loc="upper right")


def plot_memberships(rule: FuzzyRule, path: str | PathLike[str]) -> Figure:
    """Draw the price, time and quality memberships and the output singletons.

    The last evaluated input is marked on each membership chart and the
    singleton scores of the last evaluation are drawn as stems. The figure is
    written to ``path`` and returned.
    """
    figure = _new_figure(10.0, 10.0)
    price_ax, time_ax, quality_ax, fuzzy_ax = figure.subplots(4, 1)
    _draw_curve(price_ax, rule.price_curve, "Price", rule.last_price)
    _draw_curve(time_ax, rule.time_curve, "Time", rule.last_time)
    _draw_curve(quality_ax, rule.quality_curve, "Quality", rule.last_quality)

    for pos, score in zip(rule.scores_pos, rule.scores_show):
        fuzzy_ax.plot([pos, pos], [0.0, score], color="blue", linewidth=2.0)
    if rule.scores_pos:
        fuzzy_ax.plot(
            rule.scores_pos,
            rule.scores_show,
            linestyle="none",
            marker="x",
            markersize=6,
            color="green",
        )
    if rule.last_result is None:
        fuzzy_ax.set_xlabel("Singletons")
    else:
        fuzzy_ax.set_xlabel(f"Singletons {rule.last_result:,.2f}")
    fuzzy_ax.set_ylabel("Fuzzy")

    figure.tight_layout()
    figure.savefig(path)
    return figure


def plot_losses(history: PlotHistory, path: str | PathLike[str]) -> Figure:
    """Draw the training losses and test errors recorded in ``history``.

    Training losses are red, test errors green. Raises ValueError when the
    history holds nothing to draw. The figure is written to ``path`` and
    returned.
    """
    train_index = list(history.index)
    train_loss = list(history.loss)
    test_index = list(history.test_index)
    test_loss = list(history.test_loss)
    if not train_loss and not test_loss:
        raise ValueError("history holds no losses to plot")

    figure = _new_figure(11.0, 5.0)
    ax = figure.subplots()
    if train_loss:
        ax.plot(
            train_index, train_loss, color="red", label=f"Index: {len(train_loss)}"
        )
    if test_loss:
        ax.plot(test_index, test_loss, color="green", label=f"Index: {len(test_loss)}")
        ax.set_xlabel(
            f"Index, Min: {history.test_error_min:,.2f}, "
            f"Max: {history.test_error_max:,.2f}"
        )
    else:
        ax.set_xlabel("Index")
    ax.set_ylabel("MSE-Loss")
    ax.legend(loc="upper right")

    figure.tight_layout()
    figure.savefig(path)
    return figure